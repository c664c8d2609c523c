# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

import unittest

from traitcomp.meta import Meta, resolve
from traitcomp.traits import Trait
from traitcomp.objects import create
from traitcomp.messages import ENOTEXTENSIBLE, EARGS, ECONFLICT
from traitcomp import members
import traitcomp.globals

def fly(self): return 'fly'
def swim(self): return 'swim'

class Test_Meta(unittest.TestCase):
    def test_of(self):
        t = Trait({'a': 1})
        obj = t.create()
        meta = Meta.of(obj)
        self.assertIsInstance(meta, Meta)
        self.assertIs(Meta.of(type(obj)), meta)
        self.assertEqual(meta.traits, [t])
        self.assertIsNone(meta.definition)
        self.assertIsNone(Meta.of(object()))
        self.assertIsNone(Meta.of({}))

    def test_object_definition(self):
        definition = {'b': 2}
        meta = Meta.of(create(Trait({'a': 1}), definition))
        self.assertIs(meta.definition, definition)
        self.assertEqual(meta.subject, {'a': 1, 'b': 2})
        self.assertIs(meta.source_of['b'], definition)

    def test_source_of(self):
        flyer = Trait('Flyer', {'fly': fly})
        bird = Trait('Bird', flyer, {'swim': swim})
        meta = Meta.of(bird.create())
        self.assertIs(meta.source_of['fly'], flyer)
        self.assertIs(meta.source_of['swim'], bird)

    def test_base(self):
        def new_fly(self): return 'new'
        flyer = Trait('Flyer', {'fly': fly})
        jet = Trait('Jet', flyer, {'fly': new_fly})
        meta = jet.meta()
        self.assertIs(meta.base['fly'], fly)
        self.assertIs(meta.base.sources['fly'], flyer)
        self.assertIn('fly', meta.base)
        self.assertEqual(meta.base(jet.create(), 'fly'), 'fly')

    def test_has(self):
        animal = Trait()
        bird = Trait(animal)
        meta = Meta.of(bird.create())
        self.assertTrue(meta.has(bird))
        self.assertTrue(meta.has(animal))
        self.assertFalse(meta.has(Trait()))

    def test_trait_meta_unresolved(self):
        t = Trait({'a': members.required, 'b': members.ancestors()})
        meta = t.meta()
        self.assertIs(meta.subject['a'], members.required)
        self.assertIsInstance(meta.subject['b'], members.Combination)
        self.assertEqual(meta.name, t.name)

    def test_conflict_source(self):
        t = Trait('Both', Trait({'fly': fly}), Trait({'fly': swim}))
        meta = t.meta()
        self.assertIsInstance(meta.subject['fly'], members.Conflict)
        self.assertIs(meta.source_of['fly'], t)
        with self.assertRaises(ECONFLICT):
            t.resolve()

    def test_trait_meta_cached(self):
        child = Trait({'fly': fly})
        t = Trait(child)
        meta = t.meta()
        self.assertIs(t.meta(), meta)
        child.add({'swim': swim})
        self.assertIsNot(t.meta(), meta)
        self.assertIs(t.meta().subject['swim'], swim)
        self.assertNotIn('swim', meta.subject)

    def test_resolve_leaves_cache_alone(self):
        t = Trait({'size': members.property()})
        t.resolve()
        self.assertIsInstance(t.meta().subject['size'], members.Property)

    def test_shared_conflict_not_extended(self):
        both = Trait(Trait({'fly': fly}), Trait({'fly': swim}))
        Trait(both, Trait({'fly': lambda self: None})).meta()
        self.assertEqual(len(both.meta().subject['fly'].sources), 2)

    def test_deep_diamond(self):
        t = Trait({'fly': fly})
        for _ in range(60):
            t = Trait(Trait(t), Trait(t))
        self.assertEqual(t.create().fly(), 'fly')

    def test_resolve(self):
        meta = resolve([Trait({'fly': fly})], {'swim': swim})
        self.assertEqual(meta.subject, {'fly': fly, 'swim': swim})
        meta = resolve([Trait({'fly': members.required})],
                       ignore_required=True)
        self.assertIs(meta.subject['fly'], members.required)

class Test_default_members(unittest.TestCase):
    def setUp(self):
        def describe(self):
            return 'composed'
        self.describe = describe
        traitcomp.globals.default_members['describe'] = describe

    def tearDown(self):
        del traitcomp.globals.default_members['describe']

    def test_injected(self):
        obj = Trait({'a': 1}).create()
        self.assertEqual(obj.describe(), 'composed')
        self.assertIs(Meta.of(obj).source_of['describe'],
                      traitcomp.globals.default_members)

    def test_own_definition_wins(self):
        obj = create(Trait(), {'describe': lambda self: 'own'})
        self.assertEqual(obj.describe(), 'own')

class Test_object_mutation(unittest.TestCase):
    def test_add_trait(self):
        obj = create(Trait({'fly': fly}))
        Meta.of(obj).add(Trait({'swim': swim}))
        self.assertEqual(obj.swim(), 'swim')

    def test_add_definition(self):
        obj = create(Trait({'fly': fly}))
        meta = Meta.of(obj)
        meta.add({'swim': swim})
        self.assertEqual(meta.definition, {'swim': swim})
        self.assertEqual(obj.swim(), 'swim')
        meta.add({'a': 1})
        self.assertEqual(obj.a, 1)

    def test_remove(self):
        swimmer = Trait({'swim': swim})
        obj = create(Trait({'fly': fly}), swimmer, {'a': 1, 'b': 2})
        Meta.of(obj).remove(swimmer, {'a': True})
        self.assertFalse(hasattr(obj, 'swim'))
        self.assertFalse(hasattr(obj, 'a'))
        self.assertEqual(obj.b, 2)
        self.assertEqual(obj.fly(), 'fly')

    def test_add_to_object(self):
        obj = create(Trait({'fly': fly}))
        Trait({'swim': swim}).add_to(obj)
        self.assertEqual(obj.swim(), 'swim')

    def test_bad_argument(self):
        with self.assertRaises(EARGS):
            Meta.of(create(Trait())).add(42)

    def test_frozen_trait_not_extensible(self):
        t = Trait({'fly': fly}).freeze()
        obj = t.create()
        with self.assertRaises(ENOTEXTENSIBLE):
            Trait({'swim': swim}).add_to(obj)
        with self.assertRaises(ENOTEXTENSIBLE):
            Meta.of(obj).remove(t)
