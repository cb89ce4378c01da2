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
Python types for terms without a builtin python counterpart
"""

__all__ = ['Atom',
           'Null',
           'NULL',
           'Reference',
           'Port',
           'Pid',
           'Export',
           'frozendict',
           'frozenlist']

class Atom(object):
    """
    Erlang atom, value is the atom text
    """
    __slots__ = ('value',)
    def __init__(self, value):
        if isinstance(value, bytes):
            value = value.decode('utf-8')
        self.value = value
    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, repr(self.value))
    def __str__(self):
        return self.value
    def __hash__(self):
        return hash((Atom, self.value))
    def __eq__(self, other):
        return isinstance(other, Atom) and self.value == other.value
    def __ne__(self, other):
        return not self.__eq__(other)

class Null(object):
    """
    Sentinel for the 'null' atom, distinct from None ('nil')
    """
    __slots__ = ()
    def __repr__(self):
        return 'NULL'
    def __bool__(self):
        return False

# the default null sentinel for every Decoder without its own
NULL = Null()

class Reference(object):
    """
    Erlang reference, ids is a tuple of 32-bit words
    """
    def __init__(self, node, ids, creation):
        self.node = node
        self.ids = tuple(ids)
        self.creation = creation
    def _key(self):
        return (self.__class__, self.node, self.ids, self.creation)
    def __repr__(self):
        return '%s(%s,%s,%s)' % (
            self.__class__.__name__,
            repr(self.node), repr(self.ids), repr(self.creation)
        )
    def __hash__(self):
        return hash(self._key())
    def __eq__(self, other):
        return isinstance(other, Reference) and self._key() == other._key()
    def __ne__(self, other):
        return not self.__eq__(other)

class Port(Reference):
    """
    Erlang port, a node reference with a single id
    """
    def __init__(self, node, id, creation):
        # pylint: disable=redefined-builtin
        Reference.__init__(self, node, (id,), creation)
    @property
    def id(self):
        return self.ids[0]
    def __repr__(self):
        return '%s(%s,%s,%s)' % (
            self.__class__.__name__,
            repr(self.node), repr(self.id), repr(self.creation)
        )

class Pid(object):
    """
    Erlang process identifier
    """
    def __init__(self, node, id, serial, creation):
        # pylint: disable=redefined-builtin
        self.node = node
        self.id = id
        self.serial = serial
        self.creation = creation
    def _key(self):
        return (Pid, self.node, self.id, self.serial, self.creation)
    def __repr__(self):
        return '%s(%s,%s,%s,%s)' % (
            self.__class__.__name__,
            repr(self.node), repr(self.id), repr(self.serial),
            repr(self.creation)
        )
    def __hash__(self):
        return hash(self._key())
    def __eq__(self, other):
        return isinstance(other, Pid) and self._key() == other._key()
    def __ne__(self, other):
        return not self.__eq__(other)

class Export(object):
    """
    Erlang external function, fun Module:Function/Arity
    """
    def __init__(self, module, function, arity):
        self.module = module
        self.function = function
        self.arity = arity
    def _key(self):
        return (Export, self.module, self.function, self.arity)
    def __repr__(self):
        return '%s(%s,%s,%s)' % (
            self.__class__.__name__,
            repr(self.module), repr(self.function), repr(self.arity)
        )
    def __hash__(self):
        return hash(self._key())
    def __eq__(self, other):
        return isinstance(other, Export) and self._key() == other._key()
    def __ne__(self, other):
        return not self.__eq__(other)

class frozenlist(tuple):
    """
    An Erlang list used as a map key
    """
    # pylint: disable=invalid-name
    __slots__ = ()
    def __repr__(self):
        return 'frozenlist(%s)' % repr(list(self))
    def __eq__(self, other):
        if isinstance(other, list):
            return list(self) == other
        if isinstance(other, tuple) and not isinstance(other, frozenlist):
            return False
        return tuple.__eq__(self, other)
    def __ne__(self, other):
        return not self.__eq__(other)
    def __hash__(self):
        return hash((frozenlist, tuple(self)))

# frozendict is under the PSF (Python Software Foundation) License
# (from http://code.activestate.com/recipes/414283-frozen-dictionaries/)
class frozendict(dict):
    """
    An Erlang map used as a map key
    """
    # pylint: disable=invalid-name
    def _blocked_attribute(obj):
        # pylint: disable=no-self-argument
        raise AttributeError('A frozendict cannot be modified.')
    _blocked_attribute = property(_blocked_attribute)
    __delitem__ = __setitem__ = clear = _blocked_attribute
    pop = popitem = setdefault = update = _blocked_attribute
    def __new__(cls, *args, **kw):
        new = dict.__new__(cls)
        args_ = []
        for arg in args:
            if isinstance(arg, dict):
                arg = dict(arg)
                for k, v in arg.items():
                    arg[k] = freeze(v)
            args_.append(arg)
        dict.__init__(new, *args_, **kw)
        return new
    def __init__(self, *args, **kw):
        # pylint: disable=super-init-not-called
        pass
    def __hash__(self):
        try:
            return self._cached_hash
        except AttributeError:
            h = self._cached_hash = hash(frozenset(self.items()))
            return h
    def __repr__(self):
        return "frozendict(%s)" % dict.__repr__(self)

def freeze(value):
    """
    hashable form of a decoded term, for use as a map key
    """
    if isinstance(value, frozendict):
        return value
    if isinstance(value, dict):
        return frozendict(value)
    if isinstance(value, list):
        return frozenlist(freeze(element) for element in value)
    if isinstance(value, tuple) and not isinstance(value, frozenlist):
        return tuple(freeze(element) for element in value)
    return value
