# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Combination of several definitions of a member into one callable

from . import members
from .deferred import Deferred
from .messages import ECOMBCONFLICT, EAMBANCESTOR, EPROPCOMBINE, EWRAP
from .utils import noop

__all__ = (
    'Sequence',
    'sequence',
    'combine',
)

class Sequence(object):
    '''The ordered definitions that a combination merges, each with
    the trait (or definition) it came from'''
    def __init__(self):
        self.definitions = []
        self.sources = []

    def __len__(self):
        return len(self.definitions)

    def append(self, definition, source):
        self.definitions.append(definition)
        self.sources.append(source)

    def prepend(self, definition, source):
        self.definitions.insert(0, definition)
        self.sources.insert(0, source)

def ancestor_traits(source):
    traits = getattr(source, 'traits', None)
    if isinstance(traits, dict):
        return list(traits.values())
    return list(traits or ())

def base_members(source):
    '''The shadowed members of the trait or object owning a
    combination'''
    base = getattr(source, 'base', None)
    if base is None:
        base = source.meta().base
    return base

def add_ancestor_definition(seq, combination, member_name, definition,
                            trait, trait_meta):
    options = combination.options
    # follow from_() and alias_of() to the definition they select
    while isinstance(definition, (members.From, members.AliasOf)):
        trait = definition.trait
        trait_meta = trait.meta()
        definition = definition.value(member_name)
    if isinstance(definition, members.Conflict):
        if not options['recursive']:
            raise ECOMBCONFLICT(trait, definition, combination)
        for (source, value) in definition.sources:
            # sources are traits, or the definition of the conflicting
            # trait itself
            if hasattr(source, 'meta'):
                source_meta = source.meta()
            else:
                source_meta = trait_meta
            add_ancestor_definition(seq, combination, member_name, value,
                                    source, source_meta)
    elif isinstance(definition, members.Combination):
        ancestor_source = trait_meta.source_of.get(member_name, trait)
        seq.append(definition.value(member_name, ancestor_source),
                   ancestor_source)
    elif isinstance(definition, members.Required):
        pass
    elif isinstance(definition, members.Property):
        raise EPROPCOMBINE(trait, member_name, definition, combination)
    else:
        seq.append(definition, trait)

def sequence(combination, member_name, source):
    '''Collect the definitions that combination merges for the member
    member_name, declared on source'''
    seq = Sequence()
    options = combination.options

    if options['ancestors']:
        for trait in ancestor_traits(source):
            trait_meta = trait.meta()
            if member_name not in trait_meta.subject:
                continue
            add_ancestor_definition(seq, combination, member_name,
                                    trait_meta.subject[member_name],
                                    trait, trait_meta)

        if options['single_ancestor'] and len(seq) > 1:
            raise EAMBANCESTOR(source, member_name, seq.sources,
                               combination)

    wrap = options.get('wrap')
    if wrap:
        wrapped = wrap(combine(seq, options, member_name),
                       base_members(source))
        if not callable(wrapped):
            raise EWRAP(source, member_name, wrap, combination)
        seq = Sequence()
        seq.append(wrapped, source)

    if options.get('before'):
        seq.prepend(options['before'], source)
    if options.get('then'):
        seq.append(options['then'], source)
    return seq

def combine(seq, options, member_name):
    '''Compile a sequence into a single function, called as a method'''
    if not seq:
        return noop
    values = []
    for (definition, source) in zip(seq.definitions, seq.sources):
        if isinstance(definition, members.Combination):
            definition = definition.value(member_name, source)
        values.append(definition)
    continue_on_error = options['continue_on_error']

    if options['pipe']:
        def pipe_sequence(self, error=None, value=None):
            if error is not None and not continue_on_error:
                # a received error aborts the pipe like a raised one
                raise error
            index = 0
            # Deferred returned to the caller once a step goes async
            end = None
            def resume(error, value):
                nonlocal index
                index += 1
                return run(error, value)
            def run(error, value):
                nonlocal index, end
                while (index < len(values)
                       and (error is None or continue_on_error)):
                    try:
                        result = values[index](self, error, value)
                    except Exception as e:
                        (error, value) = (e, None)
                        if not continue_on_error and end is None:
                            raise
                    else:
                        if isinstance(result, Deferred):
                            if end is None:
                                end = Deferred()
                            result.set_callback(resume)
                            return end
                        (error, value) = (None, result)
                    index += 1
                if end is not None:
                    end.complete(error, value)
                return value
            return run(error, value)
        pipe_sequence.__name__ = member_name
        return pipe_sequence

    def call_sequence(self, *args, **kwargs):
        result = None
        for value in values:
            try:
                result = value(self, *args, **kwargs)
            except Exception:
                if not continue_on_error:
                    raise
                result = None
        return result
    call_sequence.__name__ = member_name
    return call_sequence
