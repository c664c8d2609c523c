# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Resolution of traits and definitions into member tables

from .members import Required, Conflict, Property, From, AliasOf, Combination
from .messages import EREQUIRED, ECONFLICT, EARGS, ENOTEXTENSIBLE
from .utils import extend
import traitcomp.globals
import traitcomp.traits

__all__ = (
    'BaseMembers',
    'Meta',
    'resolve',
)

class BaseMembers(object):
    '''Members replaced by an own definition, reachable from the
    definition that replaced them. base(obj, name, *args) invokes the
    replaced member name on obj.'''
    def __init__(self):
        # name -> replaced value
        self.members = {}
        # name -> source of the replaced value
        self.sources = {}

    def __call__(self, obj, name, *args, **kwargs):
        return self.members[name](obj, *args, **kwargs)

    def __getitem__(self, name):
        return self.members[name]

    def __contains__(self, name):
        return name in self.members

    def clear(self):
        self.members.clear()
        self.sources.clear()

class Meta(object):
    '''The member table of a trait or a composed object.

    The table is derived from an ordered list of traits and an
    optional own definition; build() merges them, resolve() turns
    markers into final members. Both can be redone at any time with
    refresh() after the traits have changed.'''

    def __init__(self, traits=(), definition=None, owner_trait=None):
        self.owner_trait = owner_trait
        self.traits = traits if owner_trait else list(traits)
        self.definition = definition
        # member name -> value
        self.subject = {}
        # member name -> trait or definition the value comes from
        self.source_of = {}
        # member name -> name of the member an alias points at
        self.original_name_of = {}
        self.base = BaseMembers()
        # name shown in messages, and given to composed classes
        self.type_name = None
        # set on the metas of composed objects, which change only by
        # objects.refresh; frozen traits keep their snapshot
        self.frozen = False
        # class whose attributes mirror the subject, if any
        self.prototype = None
        self.applied = set()

    def __repr__(self):
        return '<Meta %s>' % (self.name,)

    @property
    def name(self):
        if self.owner_trait:
            return self.owner_trait.name
        return self.type_name

    @classmethod
    def of(cls, obj):
        '''The Meta of a composed object, or None'''
        meta = getattr(obj, traitcomp.globals.meta_attribute, None)
        if isinstance(meta, cls):
            return meta
        return None

    @classmethod
    def for_trait(cls, trait):
        meta = cls(trait.traits, trait.definition, owner_trait=trait)
        return meta.build()

    @classmethod
    def for_object(cls, traits, definition=None):
        meta = cls(traits or (), definition)
        return meta.build()

    def set_member(self, name, value, source, override):
        subject = self.subject
        if name not in subject or isinstance(subject[name], Required):
            # absent or required member is added
            subject[name] = value
            self.source_of[name] = source
            return
        if isinstance(value, Required):
            # required member is already present
            return
        current = subject[name]
        if override:
            self.base.members[name] = current
            self.base.sources[name] = self.source_of.get(name)
            subject[name] = value
            self.source_of[name] = source
        elif current is value:
            # same definition reached twice, e.g. diamond inheritance
            pass
        else:
            if not isinstance(current, Conflict):
                subject[name] = Conflict(name).add(
                    self.source_of.get(name), current)
                self.source_of[name] = self.owner_trait or self.definition
            subject[name].add(source, value)

    def copy_members(self, origin):
        if isinstance(origin, traitcomp.traits.Trait):
            origin_meta = origin.meta()
            for (name, value) in origin_meta.subject.items():
                if isinstance(value, Conflict):
                    # the table of origin is shared
                    value = value.copy()
                self.set_member(name, value, origin_meta.source_of.get(name),
                                False)
        else:
            source = self.owner_trait or origin
            for (name, value) in origin.items():
                self.set_member(name, value, source, True)

    def build(self):
        for trait in self.traits:
            self.copy_members(trait)
        if self.definition:
            self.copy_members(self.definition)
        return self

    def refresh(self):
        '''Rebuild the unresolved subject from the current traits'''
        if self.owner_trait:
            self.traits = self.owner_trait.traits
            self.definition = self.owner_trait.definition
        self.subject.clear()
        self.source_of.clear()
        self.original_name_of.clear()
        self.base.clear()
        return self.build()

    def has(self, trait):
        return any(t is trait or t.has(trait) for t in self.traits)

    def owner_of(self, source):
        # Combinations in the definition of an object combine the
        # traits of that object
        if (self.owner_trait is None and source is not None
            and source is self.definition):
            return self
        return source

    def resolve_member(self, name, ignore_required=False):
        subject = self.subject
        value = subject[name]
        source = self.source_of.get(name)
        if isinstance(value, Required):
            if ignore_required:
                return
            raise EREQUIRED(source, name, value)
        if isinstance(value, Conflict):
            raise ECONFLICT(self.owner_trait or self, value)
        if isinstance(value, Combination):
            subject[name] = value.value(name, self.owner_of(source))
            self.resolve_member(name, ignore_required)
        elif isinstance(value, From):
            subject[name] = value.value(name)
            self.source_of[name] = value.trait
            self.resolve_member(name, ignore_required)
        elif isinstance(value, AliasOf):
            subject[name] = value.value(name)
            self.source_of[name] = value.trait
            self.original_name_of[name] = value.member_name
            self.resolve_member(name, ignore_required)
        elif isinstance(value, Property):
            subject[name] = value.value(name, source)

    def resolve(self, ignore_required=False):
        '''Turn the subject into the final member table. Raises
        EREQUIRED or ECONFLICT if that is not possible.'''
        defaults = traitcomp.globals.default_members
        for (name, value) in defaults.items():
            if not self.definition or name not in self.definition:
                self.subject[name] = value
                self.source_of[name] = defaults
        for name in list(self.subject):
            self.resolve_member(name, ignore_required)
        if self.prototype is not None:
            self.apply()
        return self

    def apply(self):
        '''Mirror the resolved subject on the prototype class'''
        cls = self.prototype
        for name in self.applied.difference(self.subject):
            delattr(cls, name)
        for (name, value) in self.subject.items():
            setattr(cls, name, value)
        self.applied = set(self.subject)

    def check_extensible(self):
        if self.owner_trait:
            raise ENOTEXTENSIBLE(self.owner_trait)

    def add(self, *args):
        '''Add traits or definition members to a composed object'''
        self.check_extensible()
        for (i, arg) in enumerate(args):
            if isinstance(arg, traitcomp.traits.Trait):
                if not any(t is arg for t in self.traits):
                    self.traits.append(arg)
            elif isinstance(arg, dict):
                if self.definition is None:
                    self.definition = arg
                else:
                    extend(self.definition, arg)
            else:
                raise EARGS(self, i, type(arg).__name__)
        return self.refresh().resolve()

    def remove(self, *args):
        '''Remove traits or definition members from a composed object'''
        self.check_extensible()
        for (i, arg) in enumerate(args):
            if isinstance(arg, traitcomp.traits.Trait):
                self.traits[:] = [t for t in self.traits if t is not arg]
            elif isinstance(arg, dict):
                if self.definition:
                    for name in arg:
                        self.definition.pop(name, None)
            else:
                raise EARGS(self, i, type(arg).__name__)
        return self.refresh().resolve()

def resolve(traits, definition=None, ignore_required=False):
    '''Resolve the member table of an object made from the given traits
    and own definition'''
    return Meta.for_object(traits, definition).resolve(ignore_required)
