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
Growable output buffer and bounds-checked input cursor
"""

import struct
import logging

from .tags import TAG_VERSION
from .config import DEFAULT_INITIAL_BUFFER_SIZE
from .exceptions import (BufferOverrunError, VersionMismatchError,
                         InputException)

__all__ = ['Buffer', 'Reader']

logger = logging.getLogger(__name__)

_U16 = struct.Struct(b'>H')
_U32 = struct.Struct(b'>I')
_U64 = struct.Struct(b'>Q')
_I32 = struct.Struct(b'>i')
_I64 = struct.Struct(b'>q')
_DOUBLE = struct.Struct(b'>d')

class Buffer(object):
    """
    Append-only byte buffer with a write cursor (length) that can be moved
    back to overwrite a field written earlier
    """

    def __init__(self, allocated_size=DEFAULT_INITIAL_BUFFER_SIZE):
        if allocated_size < 1:
            raise InputException('allocated_size must be positive')
        self.__buf = bytearray(allocated_size)
        self.length = 0

    @property
    def allocated_size(self):
        """
        bytes currently allocated
        """
        return len(self.__buf)

    def __len__(self):
        return self.length

    def reserve(self, size):
        """
        make room for size more bytes after the write cursor
        """
        required = self.length + size
        allocated_size = len(self.__buf)
        if required <= allocated_size:
            return
        while allocated_size < required:
            allocated_size *= 2
        logger.debug('growing buffer from %d to %d bytes',
                     len(self.__buf), allocated_size)
        self.__buf.extend(bytes(allocated_size - len(self.__buf)))

    def write_raw(self, data):
        size = len(data)
        self.reserve(size)
        self.__buf[self.length:self.length + size] = data
        self.length += size

    def write_u8(self, value):
        self.reserve(1)
        self.__buf[self.length] = value
        self.length += 1

    def __write_struct(self, packer, value):
        self.reserve(packer.size)
        packer.pack_into(self.__buf, self.length, value)
        self.length += packer.size

    def write_u16(self, value):
        self.__write_struct(_U16, value)

    def write_u32(self, value):
        self.__write_struct(_U32, value)

    def write_u64(self, value):
        self.__write_struct(_U64, value)

    def write_i32(self, value):
        self.__write_struct(_I32, value)

    def write_i64(self, value):
        self.__write_struct(_I64, value)

    def write_double(self, value):
        self.__write_struct(_DOUBLE, value)

    def append_version(self):
        self.write_u8(TAG_VERSION)

    def patch_u32(self, offset, value):
        """
        overwrite the 4 byte placeholder at offset, keeping the write
        cursor at the end of the data
        """
        end = self.length
        self.length = offset
        self.write_u32(value)
        self.length = end

    def truncate(self, length):
        """
        discard everything written after length
        """
        if length < 0 or length > self.length:
            raise InputException('invalid truncate length %d' % length)
        self.length = length

    def clear(self):
        self.length = 0

    def getvalue(self, start=0):
        """
        immutable copy of the written data
        """
        return bytes(self.__buf[start:self.length])

class Reader(object):
    """
    Read cursor over an immutable byte sequence
    """

    def __init__(self, data, offset=0):
        self.data = data
        self.size = len(data)
        self.offset = offset
        self.__view = memoryview(data)

    def remaining(self):
        return self.size - self.offset

    def at_end(self):
        return self.offset >= self.size

    def __advance(self, size):
        i = self.offset
        if size < 0 or i + size > self.size:
            raise BufferOverrunError(i, size, self.size)
        self.offset = i + size
        return i

    def read_u8(self):
        i = self.__advance(1)
        return self.data[i]

    def __read_struct(self, packer):
        i = self.__advance(packer.size)
        return packer.unpack_from(self.data, i)[0]

    def read_u16(self):
        return self.__read_struct(_U16)

    def read_u32(self):
        return self.__read_struct(_U32)

    def read_u64(self):
        return self.__read_struct(_U64)

    def read_i32(self):
        return self.__read_struct(_I32)

    def read_double(self):
        return self.__read_struct(_DOUBLE)

    def read_raw(self, size):
        """
        borrowed view of the next size bytes
        """
        i = self.__advance(size)
        return self.__view[i:i + size]

    def read_version(self):
        version = self.read_u8()
        if version != TAG_VERSION:
            raise VersionMismatchError(version)
        return version
