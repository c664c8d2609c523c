# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Creation of objects from traits

from .messages import EARGS, EMULTIDEF
import traitcomp.globals
import traitcomp.meta
import traitcomp.traits

__all__ = (
    'TraitObject',
    'bake',
    'create',
    'refresh',
    'flat_object',
)

class TraitObject(object):
    '''Base class of all classes made by bake(). The members of a
    composed object are attributes of its class; its Meta is the
    class attribute named by globals.meta_attribute.'''

def bake(meta, type_name):
    '''Make a class whose attributes are the resolved members of meta'''
    cls = type(type_name, (TraitObject,),
               {traitcomp.globals.meta_attribute: meta})
    if meta.type_name is None:
        meta.type_name = type_name
    meta.prototype = cls
    meta.apply()
    return cls

def composition_args(args):
    '''Split arguments to create() into a list of traits and an
    optional definition'''
    traits = []
    definition = None
    for (i, arg) in enumerate(args):
        if isinstance(arg, traitcomp.traits.Trait):
            traits.append(arg)
        elif isinstance(arg, dict):
            if definition is not None:
                raise EMULTIDEF(None)
            definition = arg
        elif arg is not None:
            raise EARGS(None, i, type(arg).__name__)
    return (traits, definition)

def create(*args):
    '''Create an object from any number of traits and at most one own
    definition dict.

    Objects are frozen: later changes to their traits are picked up
    by refresh(). An object made from one frozen trait and nothing
    else shares the class prepared by Trait.freeze().'''
    (traits, definition) = composition_args(args)
    if definition is None and len(traits) == 1 and traits[0].frozen:
        cls = traits[0].frozen
    else:
        type_name = '_'.join(t.name for t in traits) or '_TraitProto'
        meta = traitcomp.meta.Meta(traits, definition)
        meta.type_name = type_name
        meta.build().resolve()
        meta.frozen = True
        cls = bake(meta, type_name)
    return cls()

def refresh(*objects):
    '''Re-resolve composed objects after their traits changed'''
    for obj in objects:
        meta = traitcomp.meta.Meta.of(obj)
        if meta and meta.frozen:
            meta.refresh().resolve()

def flat_object(obj):
    '''The members of a composed object as a dict, including
    attributes set on the object itself'''
    meta = traitcomp.meta.Meta.of(obj)
    if meta is None:
        return obj
    flat = dict(meta.subject)
    flat.update(vars(obj))
    return flat
