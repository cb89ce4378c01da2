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
Erlang External Term Format version and tag values
"""

# tag values here http://www.erlang.org/doc/apps/erts/erl_ext_dist.html
TAG_VERSION = 131
TAG_COMPRESSED_ZLIB = 80
TAG_NEW_FLOAT_EXT = 70
TAG_SMALL_INTEGER_EXT = 97
TAG_INTEGER_EXT = 98
TAG_FLOAT_EXT = 99
TAG_ATOM_EXT = 100
TAG_REFERENCE_EXT = 101
TAG_PORT_EXT = 102
TAG_PID_EXT = 103
TAG_SMALL_TUPLE_EXT = 104
TAG_LARGE_TUPLE_EXT = 105
TAG_NIL_EXT = 106
TAG_STRING_EXT = 107
TAG_LIST_EXT = 108
TAG_BINARY_EXT = 109
TAG_SMALL_BIG_EXT = 110
TAG_LARGE_BIG_EXT = 111
TAG_EXPORT_EXT = 113
TAG_NEW_REFERENCE_EXT = 114
TAG_SMALL_ATOM_EXT = 115
TAG_MAP_EXT = 116
TAG_ATOM_UTF8_EXT = 118
TAG_SMALL_ATOM_UTF8_EXT = 119

# FLOAT_EXT payload is a fixed width ASCII field
FLOAT_EXT_SIZE = 31

# widest bignum magnitude (in base-256 digits) this codec handles
BIGNUM_DIGITS_MAX = 8

ATOM_SMALL_SIZE_MAX = 255
ATOM_SIZE_MAX = 65535
