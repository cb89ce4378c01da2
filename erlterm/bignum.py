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
Bignum encoding shared by the encoder and decoder.

Only magnitudes up to 8 base-256 digits (64 bits) are handled.  A negative
magnitude with the top bit set does not fit in a signed 64-bit integer and
is decoded as a signed decimal string unless exact decoding is requested.
"""

from .tags import TAG_SMALL_BIG_EXT, BIGNUM_DIGITS_MAX
from .exceptions import UnsupportedBignumWidthError, UnsupportedValueError

__all__ = ['decode_bignum', 'encode_bignum']

_TOP_BIT = 1 << 63
_MAGNITUDE_LIMIT = 1 << 64

def decode_bignum(reader, digits, exact=False):
    """
    decode the sign byte and digits that follow a bignum tag and its
    digit count
    """
    if digits > BIGNUM_DIGITS_MAX:
        raise UnsupportedBignumWidthError(digits)
    sign = reader.read_u8()
    magnitude = int.from_bytes(reader.read_raw(digits), 'little')
    if sign == 0:
        return magnitude
    if (magnitude & _TOP_BIT) == 0 or exact:
        return -magnitude
    return '-%d' % magnitude

def encode_bignum(buffer, value):
    """
    append value as SMALL_BIG_EXT with a minimal magnitude
    """
    magnitude = abs(value)
    if magnitude >= _MAGNITUDE_LIMIT:
        raise UnsupportedValueError(
            'integer %d does not fit in %d bytes' % (value, BIGNUM_DIGITS_MAX)
        )
    digits = (magnitude.bit_length() + 7) // 8
    buffer.write_u8(TAG_SMALL_BIG_EXT)
    buffer.write_u8(digits)
    buffer.write_u8(1 if value < 0 else 0)
    buffer.write_raw(magnitude.to_bytes(digits, 'little'))
