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
Codec configuration

Encoder and Decoder instances take a Config object, or share the default
instance returned by Config.instance().
"""

from .exceptions import InputException

__all__ = ['Config',
           'DEFAULT_INITIAL_BUFFER_SIZE',
           'DEFAULT_RECURSE_LIMIT',
           'DEFAULT_COMPRESSION_LEVEL']

DEFAULT_INITIAL_BUFFER_SIZE = 1024 * 1024
DEFAULT_RECURSE_LIMIT = 256
DEFAULT_COMPRESSION_LEVEL = 6

class Config(object):
    """
    Tuning values for the encoder and decoder.

    * initial_buffer_size: bytes allocated by a new Encoder, the buffer
      doubles when more space is needed
    * encode_depth_limit: default recursion budget of Encoder.pack()
    * decode_depth_limit: recursion budget of Decoder.unpack()
    * compression_level: zlib level used by Encoder.pack_compressed()
    * exact_bignums: decode negative 64-bit bignums that do not fit in a
      signed 64-bit integer as a python int instead of a decimal string
    """
    _instance = None

    def __init__(self, initial_buffer_size=DEFAULT_INITIAL_BUFFER_SIZE,
                 encode_depth_limit=DEFAULT_RECURSE_LIMIT,
                 decode_depth_limit=DEFAULT_RECURSE_LIMIT,
                 compression_level=DEFAULT_COMPRESSION_LEVEL,
                 exact_bignums=False):
        # pylint: disable=too-many-arguments
        if initial_buffer_size < 1:
            raise InputException('initial_buffer_size must be positive')
        if encode_depth_limit < 1 or decode_depth_limit < 1:
            raise InputException('depth limits must be positive')
        if compression_level < 0 or compression_level > 9:
            raise InputException('compression_level in [0..9]')
        self.initial_buffer_size = initial_buffer_size
        self.encode_depth_limit = encode_depth_limit
        self.decode_depth_limit = decode_depth_limit
        self.compression_level = compression_level
        self.exact_bignums = exact_bignums

    def copy(self):
        """
        Returns a shallow copy of this configuration
        """
        return Config(self.initial_buffer_size,
                      self.encode_depth_limit,
                      self.decode_depth_limit,
                      self.compression_level,
                      self.exact_bignums)

    def __repr__(self):
        return ('Config(initial_buffer_size=%d,encode_depth_limit=%d,'
                'decode_depth_limit=%d,compression_level=%d,'
                'exact_bignums=%s)') % (
            self.initial_buffer_size, self.encode_depth_limit,
            self.decode_depth_limit, self.compression_level,
            repr(self.exact_bignums)
        )

    @classmethod
    def instance(cls):
        """
        Returns the shared default configuration
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance
