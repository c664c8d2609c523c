# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Markers that can be used as values in trait definitions

from . import combine
from .messages import EREADONLY
import traitcomp.globals

__all__ = (
    'Required',
    'Conflict',
    'Property',
    'From',
    'AliasOf',
    'Combination',

    'required',
    'conflict',
    'property',
    'from_',
    'alias_of',
    'combination',
    'ancestors',
    'ancestor',
)

class Required(object):
    '''The member must be defined by another trait, or by the own
    definition, before an object can be created'''
    def __repr__(self):
        return 'required'

required = Required()

class Conflict(object):
    '''Different definitions of one member, in the order they were
    found. Created when a second definition arrives.'''
    def __init__(self, member_name):
        self.member_name = member_name
        # list of (source, value)
        self.sources = []

    def __repr__(self):
        return 'Conflict(%r, %d sources)' % (self.member_name,
                                             len(self.sources))

    def add(self, source, value):
        self.sources.append((source, value))
        return self

    def copy(self):
        c = Conflict(self.member_name)
        c.sources = list(self.sources)
        return c

def conflict(member_name):
    return Conflict(member_name)

# Passed to property accessors when no value was given
_unset = object()

class Property(object):
    '''A member compiled into an accessor: call it without arguments
    to get the value, with one argument to set it.

    Options:
      getter(obj)         computes the value; storage is not used
      setter(obj, value)  makes a property with a getter writable
      default_value       returned while nothing is stored
      storage_name        attribute holding the value; defaults to the
                          member name prefixed by
                          globals.storage_name_prefix
    '''
    def __init__(self, options=None):
        if callable(options):
            options = {'getter': options}
        self.options = options if options is not None else {}
        self.name = None
        self.storage_name = None

    def is_read_only(self):
        return bool(self.options.get('getter')
                    and not self.options.get('setter'))

    def value(self, member_name, source=None):
        self.name = member_name
        if not self.storage_name:
            self.storage_name = (self.options.get('storage_name')
                                 or traitcomp.globals.storage_name_prefix
                                 + member_name)
        prop = self
        def accessor(obj, value=_unset):
            options = prop.options
            getter = options.get('getter')
            if value is _unset:
                if getter:
                    result = getter(obj)
                else:
                    result = getattr(obj, prop.storage_name, None)
                if result is None:
                    result = options.get('default_value')
                return result
            if getter:
                setter = options.get('setter')
                if not setter:
                    raise EREADONLY(obj, prop)
                setter(obj, value)
                return getter(obj)
            previous = getattr(obj, prop.storage_name, None)
            if previous is not value and previous != value:
                setattr(obj, prop.storage_name, value)
                emitter = getattr(obj, traitcomp.globals.emitter_attribute,
                                  None)
                if emitter is not None:
                    emitter.property_changed(prop, value, previous)
            return value
        accessor.__name__ = member_name
        accessor.property = self
        return accessor

def property(options=None, **kwargs):
    if kwargs:
        options = dict(options or {}, **kwargs)
    return Property(options)

class From(object):
    '''Take the member from a specific trait; settles conflicts'''
    def __init__(self, trait):
        self.trait = trait

    def value(self, member_name):
        return self.trait.member(member_name)

def from_(trait):
    return From(trait)

class AliasOf(object):
    '''Take a differently named member from a specific trait'''
    def __init__(self, trait, member_name):
        self.trait = trait
        self.member_name = member_name

    def value(self, member_name=None):
        return self.trait.member(self.member_name)

def alias_of(trait, member_name):
    return AliasOf(trait, member_name)

class Combination(object):
    '''Combine several definitions of a member, typically those of
    the ancestors, into one callable'''
    default_options = {
        'continue_on_error': False,
        'pipe': False,
        'single_ancestor': False,
        'recursive': True,
        'ancestors': False,
    }

    def __init__(self, **options):
        self.options = dict(self.default_options, **options)

    def __repr__(self):
        return 'Combination(%r)' % (self.options,)

    def pipe(self):
        self.options['pipe'] = True
        return self

    def then(self, function):
        self.options['then'] = function
        return self

    def before(self, function):
        self.options['before'] = function
        return self

    def wrap(self, wrapper):
        self.options['wrap'] = wrapper
        return self

    def sequence(self, member_name, source):
        return combine.sequence(self, member_name, source)

    def value(self, member_name, source):
        return combine.combine(self.sequence(member_name, source),
                               self.options, member_name)

def combination(**options):
    return Combination(**options)

def ancestors(**options):
    options['ancestors'] = True
    return Combination(**options)

def ancestor(**options):
    options['ancestors'] = True
    options['single_ancestor'] = True
    return Combination(**options)
