# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Traits: named, composable sets of members

from .members import Required
from .messages import EARGS, EMULTIDEF, EREQUIRED, ECYCLICTRAIT, ENOTARGET
from .topsort import topsort, trait_graph, CycleFound
from .utils import extend
import traitcomp.globals
import traitcomp.meta
import traitcomp.objects

__all__ = (
    'Trait',
)

def has_member(target, name):
    if isinstance(target, dict):
        return name in target
    return hasattr(target, name)

def set_member(target, name, value):
    if isinstance(target, dict):
        target[name] = value
    else:
        setattr(target, name, value)

def changed():
    traitcomp.globals.trait_generation += 1

class Trait(object):
    '''A named set of members, composed of other traits and an own
    definition.

    Trait(*args) accepts any number of traits, at most one definition
    dict, and a name string as first or last argument. The own
    definition overrides whatever the traits provide; members that
    several traits define differently are in conflict until the own
    definition settles them.

    Traits are mutable: add() and remove() change them in place, and
    every table resolved afterwards reflects the change. Edit traits
    only through these methods; tables are cached between changes.'''

    def __init__(self, *args):
        self.traits = []
        self.definition = None
        self.name = None
        # class shared by objects created from this trait, see freeze()
        self.frozen = None
        self._meta = None
        self._meta_generation = None
        for (i, arg) in enumerate(args):
            if isinstance(arg, Trait):
                self.traits.append(arg)
            elif isinstance(arg, dict):
                if self.definition is not None:
                    raise EMULTIDEF(self)
                self.definition = arg
            elif (isinstance(arg, str) and self.name is None
                  and i in (0, len(args) - 1)):
                self.name = arg
            else:
                raise EARGS(self, i, type(arg).__name__)
        if self.definition is None:
            self.definition = {}
        if self.name is None:
            traitcomp.globals.anonymous_traits += 1
            self.name = 'Anonymous%d' % (traitcomp.globals.anonymous_traits,)

    def __repr__(self):
        return 'Trait(%r)' % (self.name,)

    def has(self, trait):
        '''Whether trait is among the traits this trait is composed of,
        directly or indirectly'''
        return any(t is trait or t.has(trait) for t in self.traits)

    def check_cycle(self, child):
        graph = trait_graph([self, child])
        graph[self] = graph[self] + [child]
        try:
            topsort(graph)
        except CycleFound as e:
            raise ECYCLICTRAIT(self, e.cycle)

    def add(self, *args):
        try:
            for (i, arg) in enumerate(args):
                if isinstance(arg, Trait):
                    if not any(t is arg for t in self.traits):
                        self.check_cycle(arg)
                        self.traits.append(arg)
                elif isinstance(arg, dict):
                    extend(self.definition, arg)
                else:
                    raise EARGS(self, i, type(arg).__name__)
        finally:
            changed()
        return self

    def remove(self, *args):
        try:
            for (i, arg) in enumerate(args):
                if isinstance(arg, Trait):
                    self.traits[:] = [t for t in self.traits
                                      if t is not arg]
                elif isinstance(arg, dict):
                    for name in arg:
                        self.definition.pop(name, None)
                else:
                    raise EARGS(self, i, type(arg).__name__)
        finally:
            changed()
        return self

    def add_to(self, target):
        '''Add this trait to a trait or composed object, or mix it into
        any other object'''
        if isinstance(target, (Trait, traitcomp.meta.Meta)):
            target.add(self)
        elif target is None:
            raise ENOTARGET(self, 'add a trait to')
        else:
            meta = traitcomp.meta.Meta.of(target)
            if meta is None:
                self.mixin(target)
            else:
                meta.add(self)
        return self

    def remove_from(self, target):
        if isinstance(target, (Trait, traitcomp.meta.Meta)):
            target.remove(self)
        else:
            meta = traitcomp.meta.Meta.of(target)
            if meta is None:
                raise ENOTARGET(self, 'remove traits from')
            meta.remove(self)
        return self

    def meta(self):
        '''The unresolved member table of this trait. The table is
        cached until some trait changes; callers must not modify it.'''
        generation = traitcomp.globals.trait_generation
        if self._meta is None or self._meta_generation != generation:
            self._meta = traitcomp.meta.Meta.for_trait(self)
            self._meta_generation = generation
        return self._meta

    def member(self, name):
        return self.meta().subject.get(name)

    def resolve(self, ignore_required=False):
        return traitcomp.meta.Meta.for_trait(self).resolve(ignore_required)

    def create(self, definition=None):
        '''Create an object from this trait and an optional own
        definition'''
        if definition is None:
            return traitcomp.objects.create(self)
        return traitcomp.objects.create(self, definition)

    def freeze(self):
        '''Resolve once, and let create() reuse the result until
        unfreeze() is called'''
        meta = self.resolve()
        self.frozen = traitcomp.objects.bake(meta, self.name)
        return self

    def unfreeze(self):
        self.frozen = None
        return self

    def mixin(self, target):
        '''Copy the resolved members of this trait to target, which can
        be a dict, a class or any object with writable attributes.
        Required members must already be present on target.'''
        if self.frozen:
            meta = traitcomp.meta.Meta.of(self.frozen)
        else:
            meta = self.resolve(ignore_required=True)
        def member_copy(target, source, name):
            value = source[name]
            if isinstance(value, Required):
                if not has_member(target, name):
                    raise EREQUIRED(meta.source_of.get(name), name, value)
            else:
                set_member(target, name, value)
        extend(target, meta.subject, member_copy=member_copy)
        return target
