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
Erlang External Term Format encoding/decoding.

Encoder and Decoder objects are owned by a single caller at a time.
The module level functions keep one encoder and decoder per thread.  A
nested term_to_binary() call, e.g. from an __etf__() transform, gets a
fresh encoder while the thread encoder is busy.
"""

import threading

from .types import (Atom, Null, NULL, Reference, Port, Pid, Export,
                    frozendict, frozenlist)
from .config import Config
from .encoder import Encoder
from .decoder import Decoder
from .compression import compress_envelope
from .exceptions import (ErlTermError, ParseException, OutputException,
                         InputException, VersionMismatchError,
                         BufferOverrunError, MalformedTailError,
                         UnsupportedTagError, UnsupportedBignumWidthError,
                         DecompressionError, MapKeyCollisionError,
                         UnsupportedValueError,
                         DepthLimitExceededError, InstancePoisonedError)

__version__ = '1.0.0'
__license__ = 'MIT'

__all__ = ['Atom',
           'Null',
           'NULL',
           'Reference',
           'Port',
           'Pid',
           'Export',
           'frozendict',
           'frozenlist',
           'Config',
           'Encoder',
           'Decoder',
           'compress_envelope',
           'binary_to_term',
           'term_to_binary',
           'pack',
           'unpack',
           'ErlTermError',
           'ParseException',
           'OutputException',
           'InputException',
           'VersionMismatchError',
           'BufferOverrunError',
           'MalformedTailError',
           'UnsupportedTagError',
           'UnsupportedBignumWidthError',
           'DecompressionError',
           'MapKeyCollisionError',
           'UnsupportedValueError',
           'DepthLimitExceededError',
           'InstancePoisonedError']

_local = threading.local()

_EMPTY = b'\x83'

def _thread_decoder():
    decoder = getattr(_local, 'decoder', None)
    if decoder is None:
        decoder = _local.decoder = Decoder()
    return decoder

def _encode(function, null):
    if null is not None or getattr(_local, 'encoding', False):
        encoder = Encoder(null=null)
        try:
            function(encoder)
        finally:
            data = encoder.release()
        return data
    encoder = getattr(_local, 'encoder', None)
    if encoder is None:
        encoder = _local.encoder = Encoder()
    _local.encoding = True
    try:
        function(encoder)
    finally:
        _local.encoding = False
        data = encoder.release()
    return data

def term_to_binary(term, compressed=False, null=None):
    """
    encode one term, compressed is False, True or a zlib level in [0..9],
    null is an extra object to encode as the 'null' atom
    """
    if compressed is False:
        return _encode(lambda encoder: encoder.pack(term), null)
    if compressed is True:
        compressed = None
    return _encode(lambda encoder: encoder.pack_compressed(term, compressed),
                   null)

def binary_to_term(data, null=None):
    """
    decode a binary holding exactly one term
    """
    decoder = Decoder(data, null)
    term = decoder.unpack()
    if decoder.offset != decoder.size:
        raise ParseException('unparsed data')
    return term

def pack(*values):
    """
    encode every value into one binary
    """
    return _encode(lambda encoder: encoder.pack_all(*values), None)

def unpack(data):
    """
    decode every term in data, returns a list
    """
    decoder = _thread_decoder()
    try:
        return decoder.reset(data).unpack_all()
    finally:
        decoder.reset(_EMPTY)
