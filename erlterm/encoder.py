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
Python value to Erlang External Term Format encoder
"""

import logging
from collections.abc import Mapping

from .tags import (TAG_NIL_EXT, TAG_SMALL_INTEGER_EXT, TAG_INTEGER_EXT,
                   TAG_NEW_FLOAT_EXT, TAG_BINARY_EXT, TAG_LIST_EXT,
                   TAG_MAP_EXT, TAG_SMALL_TUPLE_EXT, TAG_LARGE_TUPLE_EXT,
                   TAG_SMALL_ATOM_EXT, TAG_SMALL_ATOM_UTF8_EXT,
                   TAG_ATOM_UTF8_EXT, TAG_REFERENCE_EXT,
                   TAG_NEW_REFERENCE_EXT, TAG_PORT_EXT, TAG_PID_EXT,
                   TAG_EXPORT_EXT, ATOM_SMALL_SIZE_MAX, ATOM_SIZE_MAX)
from .types import Atom, Null, NULL, Reference, Port, Pid, Export, frozenlist
from .config import Config
from .buffer import Buffer
from .bignum import encode_bignum
from .compression import compress_term
from .exceptions import (UnsupportedValueError, DepthLimitExceededError,
                         InstancePoisonedError)

__all__ = ['Encoder']

logger = logging.getLogger(__name__)

_ATOM_NIL = b'nil'
_ATOM_NULL = b'null'
_ATOM_TRUE = b'true'
_ATOM_FALSE = b'false'

class Encoder(object):
    """
    Encodes python values into one reusable buffer.

    Each pack() call appends one term.  release() returns everything
    packed so far and resets the buffer for reuse.  A failed pack() leaves
    the buffer as it was before the call, but the encoder refuses to pack
    again until release() is called.
    null is the object written as the 'null' atom, besides any Null
    instance, so terms decoded with a custom null sentinel encode back.
    """

    def __init__(self, skip_version=False, config=None, null=None):
        if config is None:
            config = Config.instance()
        if null is None:
            null = NULL
        self.__config = config
        self.__null = null
        self.__skip_version = skip_version
        self.__buffer = Buffer(config.initial_buffer_size)
        self.__poisoned = False
        self.__limit = config.encode_depth_limit
        if not skip_version:
            self.__buffer.append_version()
        self.__start = self.__buffer.length

    @property
    def length(self):
        return self.__buffer.length

    @property
    def allocated_size(self):
        return self.__buffer.allocated_size

    @property
    def poisoned(self):
        return self.__poisoned

    @property
    def null(self):
        return self.__null

    def pack(self, value, depth=None):
        """
        append one term, depth is the recursion budget
        (config.encode_depth_limit by default)
        """
        if depth is None:
            depth = self.__config.encode_depth_limit
        return self.__pack_top(value, depth, depth)

    def __pack_top(self, value, depth, limit):
        if self.__poisoned:
            raise InstancePoisonedError(
                'encoder buffer is in a bad state, call release() first'
            )
        self.__limit = limit
        length = self.__buffer.length
        try:
            self.__pack(value, depth)
        except Exception as e:
            self.__buffer.truncate(length)
            self.__poisoned = True
            logger.debug('encoder poisoned: %s', e)
            raise
        return self

    def pack_all(self, *values):
        for value in values:
            self.pack(value)
        return self

    def pack_compressed(self, value, level=None, depth=None):
        """
        append one term inside a compressed envelope
        """
        if level is None:
            level = self.__config.compression_level
        if depth is None:
            depth = self.__config.encode_depth_limit
        start = self.__buffer.length
        self.__pack_top(value, depth - 1, depth)
        data_uncompressed = self.__buffer.getvalue(start)
        self.__buffer.truncate(start)
        try:
            envelope = compress_term(data_uncompressed, level)
        except Exception:
            self.__poisoned = True
            raise
        self.__buffer.write_raw(envelope)
        return self

    def release(self):
        """
        returns the encoded bytes and resets the encoder,
        b'' is returned when no term was packed
        """
        buffer = self.__buffer
        if buffer.length <= self.__start:
            data = b''
        else:
            data = buffer.getvalue()
        buffer.clear()
        if not self.__skip_version:
            buffer.append_version()
        self.__poisoned = False
        return data

    def __pack(self, value, depth):
        # pylint: disable=too-many-branches
        if depth <= 0:
            raise DepthLimitExceededError(self.__limit)
        buffer = self.__buffer
        if value is None:
            self.__pack_atom_latin1(_ATOM_NIL)
        elif value is True:
            self.__pack_atom_latin1(_ATOM_TRUE)
        elif value is False:
            self.__pack_atom_latin1(_ATOM_FALSE)
        elif value is self.__null or isinstance(value, Null):
            self.__pack_atom_latin1(_ATOM_NULL)
        elif isinstance(value, int):
            self.__pack_integer(value)
        elif isinstance(value, float):
            buffer.write_u8(TAG_NEW_FLOAT_EXT)
            buffer.write_double(value)
        elif isinstance(value, (bytes, bytearray)):
            self.__pack_binary(value)
        elif isinstance(value, str):
            self.__pack_binary(value.encode('utf-8'))
        elif isinstance(value, memoryview):
            self.__pack_binary(value.tobytes())
        elif isinstance(value, Atom):
            self.__pack_atom(value)
        elif callable(getattr(value, '__etf__', None)):
            self.__pack(value.__etf__(), depth - 1)
        elif isinstance(value, (list, frozenlist)):
            self.__pack_list(value, depth)
        elif isinstance(value, tuple):
            self.__pack_tuple(value, depth)
        elif isinstance(value, Mapping):
            self.__pack_map(value, depth)
        elif isinstance(value, Port):
            buffer.write_u8(TAG_PORT_EXT)
            self.__pack(value.node, depth - 1)
            buffer.write_u32(_unsigned(value.id, 32, 'port id'))
            buffer.write_u8(_unsigned(value.creation, 8, 'creation'))
        elif isinstance(value, Reference):
            self.__pack_reference(value, depth)
        elif isinstance(value, Pid):
            buffer.write_u8(TAG_PID_EXT)
            self.__pack(value.node, depth - 1)
            buffer.write_u32(_unsigned(value.id, 32, 'pid id'))
            buffer.write_u32(_unsigned(value.serial, 32, 'pid serial'))
            buffer.write_u8(_unsigned(value.creation, 8, 'creation'))
        elif isinstance(value, Export):
            buffer.write_u8(TAG_EXPORT_EXT)
            self.__pack(value.module, depth - 1)
            self.__pack(value.function, depth - 1)
            self.__pack(value.arity, depth - 1)
        else:
            raise UnsupportedValueError(
                'unknown python type %s' % type(value).__name__
            )

    def __pack_integer(self, value):
        buffer = self.__buffer
        if 0 <= value <= 255:
            buffer.write_u8(TAG_SMALL_INTEGER_EXT)
            buffer.write_u8(value)
        elif -2147483648 <= value <= 2147483647:
            buffer.write_u8(TAG_INTEGER_EXT)
            buffer.write_i32(value)
        else:
            encode_bignum(buffer, value)

    def __pack_binary(self, value):
        buffer = self.__buffer
        size = len(value)
        if size > 4294967295:
            raise UnsupportedValueError('binary too large')
        buffer.write_u8(TAG_BINARY_EXT)
        buffer.write_u32(size)
        buffer.write_raw(value)

    def __pack_atom_latin1(self, name):
        buffer = self.__buffer
        buffer.write_u8(TAG_SMALL_ATOM_EXT)
        buffer.write_u8(len(name))
        buffer.write_raw(name)

    def __pack_atom(self, value):
        buffer = self.__buffer
        if isinstance(value.value, str):
            name = value.value.encode('utf-8')
        else:
            raise UnsupportedValueError('unknown atom type')
        size = len(name)
        if size <= ATOM_SMALL_SIZE_MAX:
            buffer.write_u8(TAG_SMALL_ATOM_UTF8_EXT)
            buffer.write_u8(size)
        elif size <= ATOM_SIZE_MAX:
            buffer.write_u8(TAG_ATOM_UTF8_EXT)
            buffer.write_u16(size)
        else:
            raise UnsupportedValueError('atom too long (%d bytes)' % size)
        buffer.write_raw(name)

    def __pack_list(self, value, depth):
        buffer = self.__buffer
        if len(value) == 0:
            buffer.write_u8(TAG_NIL_EXT)
            return
        buffer.write_u8(TAG_LIST_EXT)
        destination = buffer.length
        buffer.write_u32(0)
        count = 0
        for element in value:
            self.__pack(element, depth - 1)
            count += 1
        buffer.patch_u32(destination, count)
        buffer.write_u8(TAG_NIL_EXT)

    def __pack_tuple(self, value, depth):
        buffer = self.__buffer
        arity = len(value)
        if arity < 256:
            buffer.write_u8(TAG_SMALL_TUPLE_EXT)
            buffer.write_u8(arity)
        else:
            buffer.write_u8(TAG_LARGE_TUPLE_EXT)
            buffer.write_u32(arity)
        for element in value:
            self.__pack(element, depth - 1)

    def __pack_map(self, value, depth):
        buffer = self.__buffer
        buffer.write_u8(TAG_MAP_EXT)
        destination = buffer.length
        buffer.write_u32(0)
        count = 0
        for key, item in value.items():
            self.__pack(key, depth - 1)
            self.__pack(item, depth - 1)
            count += 1
        buffer.patch_u32(destination, count)

    def __pack_reference(self, value, depth):
        buffer = self.__buffer
        ids = [_unsigned(i, 32, 'reference id') for i in value.ids]
        creation = _unsigned(value.creation, 8, 'creation')
        if len(ids) == 1:
            buffer.write_u8(TAG_REFERENCE_EXT)
            self.__pack(value.node, depth - 1)
            buffer.write_u32(ids[0])
            buffer.write_u8(creation)
        else:
            if len(ids) > 65535:
                raise UnsupportedValueError('too many reference ids')
            buffer.write_u8(TAG_NEW_REFERENCE_EXT)
            buffer.write_u16(len(ids))
            self.__pack(value.node, depth - 1)
            buffer.write_u8(creation)
            for i in ids:
                buffer.write_u32(i)

def _unsigned(value, bits, name):
    if not isinstance(value, int) or value < 0 or value >= (1 << bits):
        raise UnsupportedValueError(
            '%s must be an unsigned %d-bit integer' % (name, bits)
        )
    return value
