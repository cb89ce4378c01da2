#!/usr/bin/env python
#-*-Mode:python;coding:utf-8;tab-width:4;c-basic-offset:4;indent-tabs-mode:()-*-
# ex: set ft=python fenc=utf-8 sts=4 ts=4 sw=4 et nomod:
#
# MIT License
#
# Copyright (c) 2011-2022 Michael Truog <mjtruog at protonmail dot com>
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
# DEALINGS IN THE SOFTWARE.
#
"""
Erlang External Term Format to python value decoder
"""

import logging

from .tags import (TAG_COMPRESSED_ZLIB, TAG_NEW_FLOAT_EXT,
                   TAG_SMALL_INTEGER_EXT, TAG_INTEGER_EXT, TAG_FLOAT_EXT,
                   TAG_ATOM_EXT, TAG_REFERENCE_EXT, TAG_PORT_EXT, TAG_PID_EXT,
                   TAG_SMALL_TUPLE_EXT, TAG_LARGE_TUPLE_EXT, TAG_NIL_EXT,
                   TAG_STRING_EXT, TAG_LIST_EXT, TAG_BINARY_EXT,
                   TAG_SMALL_BIG_EXT, TAG_LARGE_BIG_EXT, TAG_EXPORT_EXT,
                   TAG_NEW_REFERENCE_EXT, TAG_SMALL_ATOM_EXT, TAG_MAP_EXT,
                   TAG_ATOM_UTF8_EXT, TAG_SMALL_ATOM_UTF8_EXT,
                   FLOAT_EXT_SIZE)
from .types import Atom, NULL, Reference, Port, Pid, Export, freeze
from .config import Config
from .buffer import Reader
from .bignum import decode_bignum
from .compression import decompress_term
from .exceptions import (ParseException, MalformedTailError,
                         UnsupportedTagError, MapKeyCollisionError,
                         DepthLimitExceededError, InstancePoisonedError)

__all__ = ['Decoder']

logger = logging.getLogger(__name__)

class Decoder(object):
    """
    Decodes terms from one byte sequence, left to right.

    The input is copied and its version byte checked on construction (and
    on reset()).  Any failure leaves the decoder invalid: every later read
    raises InstancePoisonedError until reset() is given new data.
    Decoder() without data starts out invalid.
    """

    def __init__(self, data=None, null=None, config=None):
        if config is None:
            config = Config.instance()
        if null is None:
            null = NULL
        self.__config = config
        self.__null = null
        self.__reader = Reader(b'')
        self.__invalid = True
        if data is not None:
            self.reset(data)

    @property
    def offset(self):
        return self.__reader.offset

    @property
    def size(self):
        return self.__reader.size

    @property
    def invalid(self):
        return self.__invalid

    @property
    def null(self):
        return self.__null

    def reset(self, data):
        """
        decode from new data, starting after its version byte
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            self.__invalid = True
            raise ParseException('not bytes input')
        self.__reader = Reader(bytes(data))
        self.__invalid = False
        self.__guarded(self.__reader.read_version)
        return self

    def unpack(self):
        """
        decode the next term
        """
        return self.__guarded(self.__unpack_top)

    def unpack_all(self):
        """
        decode every remaining term
        """
        if self.__invalid:
            raise InstancePoisonedError('decoder is invalid, reset() it')
        terms = []
        while not self.__reader.at_end():
            terms.append(self.unpack())
        return terms

    def read_u8(self):
        return self.__guarded(self.__reader.read_u8)

    def read_u16(self):
        return self.__guarded(self.__reader.read_u16)

    def read_u32(self):
        return self.__guarded(self.__reader.read_u32)

    def read_u64(self):
        return self.__guarded(self.__reader.read_u64)

    def __guarded(self, function):
        if self.__invalid:
            raise InstancePoisonedError('decoder is invalid, reset() it')
        try:
            return function()
        except Exception as e:
            self.__invalid = True
            logger.debug('decoder invalid at offset %d: %s',
                         self.__reader.offset, e)
            raise

    def __unpack_top(self):
        return self.__unpack(self.__reader, self.__config.decode_depth_limit)

    def __unpack(self, reader, depth):
        # pylint: disable=too-many-branches
        # pylint: disable=too-many-return-statements
        if depth <= 0:
            raise DepthLimitExceededError(self.__config.decode_depth_limit)
        tag = reader.read_u8()
        if tag == TAG_SMALL_INTEGER_EXT:
            return reader.read_u8()
        elif tag == TAG_INTEGER_EXT:
            return reader.read_i32()
        elif tag == TAG_NEW_FLOAT_EXT:
            return reader.read_double()
        elif tag == TAG_FLOAT_EXT:
            return _float_ext(reader.read_raw(FLOAT_EXT_SIZE))
        elif tag == TAG_SMALL_ATOM_EXT or tag == TAG_SMALL_ATOM_UTF8_EXT:
            return self.__atom(reader.read_raw(reader.read_u8()))
        elif tag == TAG_ATOM_EXT or tag == TAG_ATOM_UTF8_EXT:
            return self.__atom(reader.read_raw(reader.read_u16()))
        elif tag == TAG_SMALL_TUPLE_EXT:
            return tuple(self.__sequence(reader, reader.read_u8(), depth))
        elif tag == TAG_LARGE_TUPLE_EXT:
            return tuple(self.__sequence(reader, reader.read_u32(), depth))
        elif tag == TAG_NIL_EXT:
            return []
        elif tag == TAG_STRING_EXT:
            return list(reader.read_raw(reader.read_u16()))
        elif tag == TAG_LIST_EXT:
            elements = self.__sequence(reader, reader.read_u32(), depth)
            tail = reader.read_u8()
            if tail != TAG_NIL_EXT:
                raise MalformedTailError(tail)
            return elements
        elif tag == TAG_MAP_EXT:
            return self.__map(reader, reader.read_u32(), depth)
        elif tag == TAG_BINARY_EXT:
            return bytes(reader.read_raw(reader.read_u32()))
        elif tag == TAG_SMALL_BIG_EXT:
            return decode_bignum(reader, reader.read_u8(),
                                 self.__config.exact_bignums)
        elif tag == TAG_LARGE_BIG_EXT:
            return decode_bignum(reader, reader.read_u32(),
                                 self.__config.exact_bignums)
        elif tag == TAG_REFERENCE_EXT:
            node = self.__unpack(reader, depth - 1)
            ids = (reader.read_u32(),)
            return Reference(node, ids, reader.read_u8())
        elif tag == TAG_NEW_REFERENCE_EXT:
            length = reader.read_u16()
            node = self.__unpack(reader, depth - 1)
            creation = reader.read_u8()
            ids = tuple(reader.read_u32() for _ in range(length))
            return Reference(node, ids, creation)
        elif tag == TAG_PORT_EXT:
            node = self.__unpack(reader, depth - 1)
            port_id = reader.read_u32()
            return Port(node, port_id, reader.read_u8())
        elif tag == TAG_PID_EXT:
            node = self.__unpack(reader, depth - 1)
            pid_id = reader.read_u32()
            serial = reader.read_u32()
            return Pid(node, pid_id, serial, reader.read_u8())
        elif tag == TAG_EXPORT_EXT:
            module = self.__unpack(reader, depth - 1)
            function = self.__unpack(reader, depth - 1)
            arity = self.__unpack(reader, depth - 1)
            return Export(module, function, arity)
        elif tag == TAG_COMPRESSED_ZLIB:
            data_uncompressed = decompress_term(reader)
            inner = Reader(data_uncompressed)
            term = self.__unpack(inner, depth - 1)
            if not inner.at_end():
                raise ParseException('unparsed data')
            return term
        else:
            raise UnsupportedTagError(tag)

    def __sequence(self, reader, arity, depth):
        sequence = []
        for _ in range(arity):
            sequence.append(self.__unpack(reader, depth - 1))
        return sequence

    def __map(self, reader, arity, depth):
        pairs = {}
        for _ in range(arity):
            key = self.__unpack(reader, depth - 1)
            pairs[freeze(key)] = self.__unpack(reader, depth - 1)
        if len(pairs) != arity:
            raise MapKeyCollisionError(arity, len(pairs))
        return pairs

    def __atom(self, name):
        name = bytes(name)
        if name == b'nil':
            return None
        elif name == b'null':
            return self.__null
        elif name == b'true':
            return True
        elif name == b'false':
            return False
        try:
            return Atom(name.decode('utf-8'))
        except UnicodeDecodeError:
            # ATOM_EXT and SMALL_ATOM_EXT text is latin-1
            return Atom(name.decode('latin-1'))

def _float_ext(data):
    text = bytes(data).partition(b'\0')[0].strip()
    try:
        return float(text)
    except ValueError:
        raise ParseException('invalid float %s' % repr(text))
