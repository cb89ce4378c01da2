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
Erlang External Term Format Encoding Tests
"""

import unittest
import collections
import erlterm
from erlterm import (Encoder, Config, Atom, NULL, Reference, Port, Pid,
                     Export, frozenlist)
from erlterm.exceptions import (UnsupportedValueError,
                                DepthLimitExceededError,
                                InstancePoisonedError, InputException)

# pylint: disable=missing-docstring

_NODE = b'w\rnonode@nohost'

def encode(value, depth=None):
    return Encoder().pack(value, depth).release()

def nested(levels):
    value = []
    for _ in range(levels - 1):
        value = [value]
    return value

class Point(object):
    def __init__(self, x, y):
        self.x = x
        self.y = y
    def __etf__(self):
        return (Atom('point'), self.x, self.y)

class Wrapped(object):
    def __init__(self, value):
        self.value = value
    def __etf__(self):
        return self.value

class EncodeTestCase(unittest.TestCase):
    # pylint: disable=invalid-name
    def test_small_integer(self):
        self.assertEqual(b'\x83a\0', encode(0))
        self.assertEqual(b'\x83a\xff', encode(255))
    def test_integer(self):
        self.assertEqual(b'\x83b\0\0\1\0', encode(256))
        self.assertEqual(b'\x83b\xff\xff\xff\xff', encode(-1))
        self.assertEqual(b'\x83b\x80\0\0\0', encode(-2147483648))
        self.assertEqual(b'\x83b\x7f\xff\xff\xff', encode(2147483647))
    def test_long_integer(self):
        self.assertEqual(b'\x83n\4\0\0\0\0\x80', encode(2147483648))
        self.assertEqual(b'\x83n\4\1\1\0\0\x80', encode(-2147483649))
        self.assertEqual(b'\x83n\x08\0' + b'\xff' * 7 + b'\x7f',
                         encode(2 ** 63 - 1))
        self.assertRaises(UnsupportedValueError, encode, 2 ** 64)
        self.assertRaises(UnsupportedValueError, encode, 2 ** 2040)
    def test_float(self):
        self.assertEqual(b'\x83F\0\0\0\0\0\0\0\0', encode(0.0))
        self.assertEqual(b'\x83F?\xe0\0\0\0\0\0\0', encode(0.5))
        self.assertEqual(b'\x83F\xbf\xe0\0\0\0\0\0\0', encode(-0.5))
        self.assertEqual(b'\x83F@\t!\xfbM\x12\xd8J', encode(3.1415926))
    def test_predefined_atoms(self):
        self.assertEqual(b'\x83s\3nil', encode(None))
        self.assertEqual(b'\x83s\4null', encode(NULL))
        self.assertEqual(b'\x83s\4true', encode(True))
        self.assertEqual(b'\x83s\5false', encode(False))
    def test_null_sentinel(self):
        sentinel = object()
        encoder = Encoder(null=sentinel)
        self.assertTrue(encoder.null is sentinel)
        self.assertEqual(b'\x83l\0\0\0\2s\4nulls\4nullj',
                         encoder.pack([sentinel, NULL]).release())
        self.assertTrue(Encoder().null is NULL)
        self.assertRaises(UnsupportedValueError, encode, sentinel)
        decoded = erlterm.Decoder(b'\x83s\4null', null=sentinel).unpack()
        self.assertEqual(b'\x83s\4null',
                         Encoder(null=sentinel).pack(decoded).release())
    def test_atom(self):
        self.assertEqual(b'\x83w\0', encode(Atom('')))
        self.assertEqual(b'\x83w\4test', encode(Atom('test')))
        self.assertEqual(b'\x83w\5\xc3\xa9t\xc3\xa9', encode(Atom(u'\xe9t\xe9')))
        self.assertEqual(b'\x83w\xff' + b'X' * 255, encode(Atom('X' * 255)))
        self.assertEqual(b'\x83v\1\0' + b'X' * 256, encode(Atom('X' * 256)))
        self.assertRaises(UnsupportedValueError,
                          encode, Atom('X' * 65536))
        self.assertRaises(UnsupportedValueError, encode, Atom(None))
    def test_binary(self):
        self.assertEqual(b'\x83m\0\0\0\0', encode(b''))
        self.assertEqual(b'\x83m\0\0\0\4data', encode(b'data'))
        self.assertEqual(b'\x83m\0\0\0\4data', encode(bytearray(b'data')))
        self.assertEqual(b'\x83m\0\0\0\4data', encode(memoryview(b'data')))
    def test_string(self):
        self.assertEqual(b'\x83m\0\0\0\4test', encode('test'))
        self.assertEqual(b'\x83m\0\0\0\2\xc4\x80', encode(u'Ā'))
    def test_list(self):
        self.assertEqual(b'\x83j', encode([]))
        self.assertEqual(b'\x83l\0\0\0\1jj', encode([[]]))
        self.assertEqual(b'\x83l\0\0\0\2a\1a\2j', encode([1, 2]))
        self.assertEqual(b'\x83l\0\0\0\5jjjjjj',
                         encode([[], [], [], [], []]))
        self.assertEqual(b'\x83l\0\0\0\2a\1a\2j', encode(frozenlist([1, 2])))
    def test_list_count_backpatch(self):
        data = encode([b'a'] * 300)
        self.assertEqual(b'\x83l\0\0\1\x2c', data[:6])
        self.assertEqual(b'\x83l\0\0\1\x2c' + b'm\0\0\0\1a' * 300 + b'j',
                         data)
        data = encode([[1, 2], [3]])
        self.assertEqual(b'\x83l\0\0\0\2l\0\0\0\2a\1a\2jl\0\0\0\1a\3jj',
                         data)
    def test_tuple(self):
        self.assertEqual(b'\x83h\0', encode(()))
        self.assertEqual(b'\x83h\2h\0h\0', encode(((), ())))
        self.assertEqual(b'\x83h\xff' + b'h\0' * 255,
                         encode(tuple([()] * 255)))
        self.assertEqual(b'\x83i\0\0\1\0' + b'h\0' * 256,
                         encode(tuple([()] * 256)))
    def test_map(self):
        self.assertEqual(b'\x83t\0\0\0\0', encode({}))
        self.assertEqual(b'\x83t\0\0\0\1w\1aa\1', encode({Atom('a'): 1}))
        ordered = collections.OrderedDict()
        ordered[1] = [2]
        ordered[b'k'] = {}
        self.assertEqual(b'\x83t\0\0\0\2a\1l\0\0\0\1a\2jm\0\0\0\1kt\0\0\0\0',
                         encode(ordered))
    def test_reference(self):
        node = Atom('nonode@nohost')
        self.assertEqual(b'\x83e' + _NODE + b'\0\0\0\1\2',
                         encode(Reference(node, [1], 2)))
        self.assertEqual(b'\x83r\0\3' + _NODE + b'\2'
                         b'\0\0\0\1\0\0\0\2\0\0\0\3',
                         encode(Reference(node, [1, 2, 3], 2)))
        self.assertRaises(UnsupportedValueError,
                          encode, Reference(node, [2 ** 32], 0))
        self.assertRaises(UnsupportedValueError,
                          encode, Reference(node, [1], 256))
    def test_port(self):
        self.assertEqual(b'\x83f' + _NODE + b'\0\0\0\6\0',
                         encode(Port(Atom('nonode@nohost'), 6, 0)))
    def test_pid(self):
        self.assertEqual(b'\x83g' + _NODE + b'\0\0\0N\0\0\0\0\0',
                         encode(Pid(Atom('nonode@nohost'), 78, 0, 0)))
        self.assertRaises(UnsupportedValueError,
                          encode, Pid(Atom('nonode@nohost'), -1, 0, 0))
    def test_export(self):
        self.assertEqual(b'\x83qw\6erlangw\4selfa\0',
                         encode(Export(Atom('erlang'), Atom('self'), 0)))
    def test_user_transform(self):
        self.assertEqual(b'\x83h\3w\5pointa\1a\2', encode(Point(1, 2)))
        self.assertEqual(b'\x83l\0\0\0\1h\3w\5pointa\1a\2j',
                         encode([Point(1, 2)]))
    def test_unsupported(self):
        self.assertRaises(UnsupportedValueError, encode, object())
        self.assertRaises(UnsupportedValueError, encode, set([1]))
        self.assertRaises(UnsupportedValueError, encode, [1, 2.0, object()])
        self.assertRaises(TypeError, encode, object())

class DepthTestCase(unittest.TestCase):
    def test_depth_budget(self):
        self.assertEqual(b'\x83l\0\0\0\1l\0\0\0\1jjj', encode(nested(3), 3))
        self.assertRaises(DepthLimitExceededError, encode, nested(4), 3)
        self.assertEqual(b'\x83a\1', encode(1, 1))
        self.assertRaises(DepthLimitExceededError, encode, [1], 1)
    def test_default_depth(self):
        encode(nested(256))
        self.assertRaises(DepthLimitExceededError, encode, nested(257))
    def test_configured_depth(self):
        config = Config(encode_depth_limit=2)
        encoder = Encoder(config=config)
        encoder.pack([1])
        self.assertRaises(DepthLimitExceededError, encoder.pack, [[1]])
    def test_map_depth(self):
        self.assertEqual(b'\x83t\0\0\0\1a\1a\2', encode({1: 2}, 2))
        self.assertRaises(DepthLimitExceededError, encode, {1: [2]}, 2)
        self.assertRaises(DepthLimitExceededError, encode, {(1,): 2}, 2)
    def test_user_transform_depth(self):
        # the transform itself consumes one unit
        self.assertEqual(b'\x83a\1', encode(Wrapped(1), 2))
        self.assertRaises(DepthLimitExceededError, encode, Wrapped(1), 1)
        self.assertRaises(DepthLimitExceededError,
                          encode, Wrapped(Wrapped(1)), 2)
    def test_depth_error(self):
        try:
            encode(nested(5), 4)
        except DepthLimitExceededError as e:
            self.assertEqual(4, e.limit)
            self.assertEqual('nesting depth exceeds 4', str(e))
        else:
            self.fail('DepthLimitExceededError not raised')
    def test_compressed_depth_error(self):
        # the envelope consumes one unit of the budget given by the caller
        encoder = Encoder()
        encoder.pack_compressed(nested(3), depth=4)
        encoder.release()
        try:
            encoder.pack_compressed(nested(4), depth=4)
        except DepthLimitExceededError as e:
            self.assertEqual(4, e.limit)
        else:
            self.fail('DepthLimitExceededError not raised')
        self.assertTrue(encoder.poisoned)

class EncoderTestCase(unittest.TestCase):
    def test_release(self):
        encoder = Encoder()
        self.assertEqual(1, encoder.length)
        self.assertEqual(b'', encoder.release())
        encoder.pack(1)
        self.assertEqual(b'\x83a\1', encoder.release())
        self.assertEqual(1, encoder.length)
        encoder.pack(2)
        self.assertEqual(b'\x83a\2', encoder.release())
    def test_skip_version(self):
        encoder = Encoder(skip_version=True)
        self.assertEqual(0, encoder.length)
        self.assertEqual(b'', encoder.release())
        self.assertEqual(b'a\1', encoder.pack(1).release())
        self.assertEqual(b'a\2', encoder.pack(2).release())
    def test_pack_all(self):
        encoder = Encoder()
        encoder.pack_all(1, [], Atom('a'))
        self.assertEqual(b'\x83a\1jw\1a', encoder.release())
        self.assertEqual(b'\x83a\1a\2', encoder.pack(1).pack(2).release())
    def test_initial_allocation(self):
        self.assertEqual(1024 * 1024, Encoder().allocated_size)
        encoder = Encoder(config=Config(initial_buffer_size=4))
        self.assertEqual(4, encoder.allocated_size)
        encoder.pack(b'x' * 100)
        self.assertEqual(106, encoder.length)
        self.assertEqual(128, encoder.allocated_size)
        self.assertEqual(b'\x83m\0\0\0\x64' + b'x' * 100, encoder.release())
    def test_poisoned(self):
        encoder = Encoder()
        encoder.pack(1)
        self.assertFalse(encoder.poisoned)
        self.assertRaises(UnsupportedValueError,
                          encoder.pack, [1, object()])
        self.assertTrue(encoder.poisoned)
        self.assertRaises(InstancePoisonedError, encoder.pack, 2)
        self.assertRaises(InstancePoisonedError, encoder.pack_all, 2, 3)
        # the failed term is not in the output
        self.assertEqual(b'\x83a\1', encoder.release())
        self.assertFalse(encoder.poisoned)
        self.assertEqual(b'\x83a\2', encoder.pack(2).release())
    def test_poisoned_depth(self):
        encoder = Encoder()
        self.assertRaises(DepthLimitExceededError,
                          encoder.pack, nested(3), 2)
        self.assertRaises(InstancePoisonedError, encoder.pack, 1)
        self.assertEqual(b'', encoder.release())
    def test_pack_compressed(self):
        encoder = Encoder()
        encoder.pack(1)
        encoder.pack_compressed([[]] * 15)
        encoder.pack(2)
        data = encoder.release()
        self.assertEqual(b'\x83a\1P\0\0\0\x15', data[:8])
        self.assertEqual(b'a\2', data[-2:])
        self.assertEqual([1, [[]] * 15, 2], erlterm.unpack(data))
    def test_pack_compressed_level(self):
        encoder = Encoder()
        self.assertRaises(InputException,
                          encoder.pack_compressed, [1], 10)
        self.assertTrue(encoder.poisoned)
        self.assertEqual(b'', encoder.release())

if __name__ == '__main__':
    unittest.main()
