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
Exceptions raised by the Erlang External Term Format codec
"""

__all__ = ['ErlTermError',
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

class ErlTermError(Exception):
    """
    Base class of every codec error
    """
    def __init__(self, s):
        Exception.__init__(self, str(s))
        self.__s = str(s)
    def __str__(self):
        return self.__s

# decoding

class ParseException(ErlTermError):
    """
    Invalid External Term Format input
    """

class VersionMismatchError(ParseException):
    """
    The leading format version byte is not 131
    """
    def __init__(self, version):
        ParseException.__init__(self, 'invalid version %s' % repr(version))
        self.version = version

class BufferOverrunError(ParseException):
    """
    A read would pass the end of the buffer
    """
    def __init__(self, offset, size, total):
        ParseException.__init__(
            self, 'missing data (%d bytes at offset %d, %d available)' % (
                size, offset, max(total - offset, 0)
            )
        )
        self.offset = offset
        self.size = size

class MalformedTailError(ParseException):
    """
    A list does not end with the nil tail marker
    """
    def __init__(self, tag):
        ParseException.__init__(self, 'invalid list tail tag %d' % tag)
        self.tag = tag

class UnsupportedTagError(ParseException):
    """
    Unknown tag byte
    """
    def __init__(self, tag):
        ParseException.__init__(self, 'invalid tag %d' % tag)
        self.tag = tag

class UnsupportedBignumWidthError(ParseException):
    """
    Bignum wider than 8 bytes
    """
    def __init__(self, digits):
        ParseException.__init__(
            self, 'bignum of %d bytes is wider than 8 bytes' % digits
        )
        self.digits = digits

class DecompressionError(ParseException):
    """
    The compressed term is corrupt
    """

class MapKeyCollisionError(ParseException):
    """
    Map keys that differ as terms are equal in python (1, 1.0 and true)
    """
    def __init__(self, arity, size):
        ParseException.__init__(
            self, 'map of %d pairs has only %d distinct python keys' % (
                arity, size
            )
        )
        self.arity = arity
        self.size = size

# encoding

class OutputException(ErlTermError, TypeError):
    """
    A value can not be encoded
    """

class UnsupportedValueError(OutputException):
    """
    The python type has no term representation
    """

class InputException(ErlTermError, ValueError):
    """
    Invalid function argument
    """

# both directions

class DepthLimitExceededError(ErlTermError):
    """
    Nesting exceeded the recursion budget
    """
    def __init__(self, limit):
        ErlTermError.__init__(
            self, 'nesting depth exceeds %d' % limit
        )
        self.limit = limit

class InstancePoisonedError(ErlTermError):
    """
    The encoder or decoder failed previously and must be reset
    """
