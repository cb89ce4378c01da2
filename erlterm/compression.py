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
Compressed term envelope, [80][uncompressed size:u32][zlib stream]
"""

import zlib
import logging

from .tags import TAG_COMPRESSED_ZLIB, TAG_VERSION
from .config import DEFAULT_COMPRESSION_LEVEL
from .buffer import Buffer, Reader
from .exceptions import DecompressionError, InputException

__all__ = ['decompress_term', 'compress_term', 'compress_envelope']

logger = logging.getLogger(__name__)

def decompress_term(reader):
    """
    read the envelope payload that follows the compressed tag,
    returning the uncompressed term bytes.
    the reader is advanced past the compressed bytes actually consumed,
    anything after the end of the zlib stream is left unread.
    """
    size_uncompressed = reader.read_u32()
    if size_uncompressed == 0:
        raise DecompressionError('compressed data null')
    data_compressed = bytes(reader.data[reader.offset:])
    decompressor = zlib.decompressobj()
    try:
        data_uncompressed = decompressor.decompress(data_compressed,
                                                    size_uncompressed + 1)
    except zlib.error as e:
        logger.debug('inflate failed at offset %d: %s', reader.offset, e)
        raise DecompressionError('compression corrupt: %s' % e)
    if len(data_uncompressed) != size_uncompressed:
        raise DecompressionError(
            'compression size mismatch (%d != %d)' % (
                len(data_uncompressed), size_uncompressed
            )
        )
    if not decompressor.eof:
        raise DecompressionError('compressed data truncated')
    consumed = len(data_compressed) - len(decompressor.unused_data)
    reader.read_raw(consumed)
    return data_uncompressed

def compress_term(data_uncompressed, level=DEFAULT_COMPRESSION_LEVEL):
    """
    envelope for the version-free term bytes data_uncompressed
    """
    if level is True:
        level = DEFAULT_COMPRESSION_LEVEL
    if level < 0 or level > 9:
        raise InputException('compressed in [0..9]')
    data_compressed = zlib.compress(data_uncompressed, level)
    buffer = Buffer(len(data_compressed) + 5)
    buffer.write_u8(TAG_COMPRESSED_ZLIB)
    buffer.write_u32(len(data_uncompressed))
    buffer.write_raw(data_compressed)
    return buffer.getvalue()

def compress_envelope(data, level=DEFAULT_COMPRESSION_LEVEL):
    """
    compress a versioned binary holding one term, the result is a
    versioned binary holding the compressed envelope
    """
    reader = Reader(data)
    reader.read_version()
    return (bytes((TAG_VERSION,)) +
        compress_term(bytes(reader.read_raw(reader.remaining())), level)
    )
