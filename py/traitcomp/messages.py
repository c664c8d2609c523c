# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

from .logging import TraitError, TraitWarning, site_name

def source_list(sources):
    "Comma separated names of the given sources, in order"
    return ', '.join(site_name(s) for s in sources)

class EREQUIRED(TraitError):
    """
    A member marked as `required` was not defined by any other trait,
    by the own definition of the composed object, or, when mixing a
    trait into a foreign object, by that object.
    """
    fmt = 'Required member not found: "%s"%s'
    def __init__(self, site, member_name, required):
        by = (', required by "%s"' % (site.name,)
              if isinstance(getattr(site, 'name', None), str) else '')
        TraitError.__init__(self, site, member_name, by)
        self.member_name = member_name
        self.required = required
        self.required_by = site

class ECONFLICT(TraitError):
    """
    Two or more traits define different values for the same member,
    and neither the own definition nor a `from_`, `alias_of` or
    combination member settles which one to use.
    """
    fmt = 'Unresolved conflict on member "%s"%s'
    def __init__(self, site, conflict):
        sources = [source for (source, _) in conflict.sources]
        TraitError.__init__(
            self, site, conflict.member_name,
            ', sources: ' + source_list(sources) if sources else '')
        self.conflict = conflict
        self.member_name = conflict.member_name
        self.sources = sources

class ECOMBCONFLICT(ECONFLICT):
    """
    A combination created with `recursive=False` found a conflicting
    member on one of its ancestors. Recursive combinations use every
    conflicting definition instead.
    """
    def __init__(self, site, conflict, combination):
        ECONFLICT.__init__(self, site, conflict)
        self.combination = combination

class EAMBANCESTOR(TraitError):
    """
    A member defined with `ancestor()` expects exactly one ancestor
    definition, but more than one of the direct traits defines it. Use
    `ancestors()` to invoke all of them.
    """
    fmt = ('multiple ancestor definitions were found (single was'
           ' expected). member: "%s", at: "%s", sources: %s')
    def __init__(self, site, member_name, sources, combination):
        TraitError.__init__(self, site, member_name, site_name(site),
                            source_list(sources))
        self.member_name = member_name
        self.sources = list(sources)
        self.combination = combination

class EPROPCOMBINE(TraitError):
    """
    An ancestor defines the combined member as a property. Properties
    keep state and cannot take part in a combination.
    """
    fmt = 'properties cannot be combined. member: "%s"'
    def __init__(self, site, member_name, property, combination):
        TraitError.__init__(self, site, member_name)
        self.member_name = member_name
        self.property = property
        self.combination = combination

class EWRAP(TraitError):
    """
    The `wrap` function of a combination must return the callable that
    replaces the combined member.
    """
    fmt = 'wrap must return a function. member: "%s", at: "%s"'
    def __init__(self, site, member_name, wrap, combination):
        TraitError.__init__(self, site, member_name, site_name(site))
        self.member_name = member_name
        self.wrap = wrap
        self.combination = combination

class EREADONLY(TraitError):
    """
    A value was assigned to a property that has a getter but no
    setter.
    """
    fmt = 'property is readonly: "%s"'
    def __init__(self, site, property):
        TraitError.__init__(self, site, property.name)
        self.property = property

class EARGS(TraitError):
    """
    A trait, or a composed object, was constructed from an argument
    that is neither a trait, a definition mapping, nor a name string
    in the first or last position.
    """
    fmt = 'unexpected argument at index %d, type: %s'
    def __init__(self, site, index, kind):
        TraitError.__init__(self, site, index, kind)
        self.index = index
        self.kind = kind

class EMULTIDEF(TraitError):
    """
    At most one definition mapping can be given when constructing a
    trait or composing an object.
    """
    fmt = 'multiple definition objects are not supported'

class ETIMEOUT(TraitError):
    """
    A deferred result was not completed within its timeout.
    """
    fmt = 'timeout'
    def __init__(self, deferred):
        TraitError.__init__(self, None)
        self.deferred = deferred
        self.timeout = deferred.timeout

class ECYCLICTRAIT(TraitError):
    """
    A trait includes itself, either directly or indirectly.
    """
    fmt = 'cyclic trait composition: %s'
    def __init__(self, site, cycle):
        TraitError.__init__(self, site,
                            ' -> '.join(site_name(t) for t in cycle))
        self.cycle = cycle

class ENOTEXTENSIBLE(TraitError):
    """
    The members of an object created from a frozen trait live in the
    trait; add to or remove from the trait instead of the object.
    """
    fmt = ('this object has no extensible prototype, modify parent'
           ' trait instead: %s')
    def __init__(self, site):
        TraitError.__init__(self, site, site_name(site))

class ENOTARGET(TraitError):
    """
    Traits can only be added to traits, composed objects, or objects
    that accept a mixin; they can only be removed from traits and
    composed objects.
    """
    fmt = 'cannot %s this object'

class EEVENTTYPE(TraitError):
    """
    Event types must be non-empty strings.
    """
    fmt = 'invalid event type: %r'
    def __init__(self, site, event_type):
        TraitError.__init__(self, site, event_type)
        self.event_type = event_type

class EPENDING(TraitError):
    """
    A member whose implementation is pending was invoked.
    """
    fmt = '%s'
    def __init__(self, site, message, method_name):
        TraitError.__init__(self, site, message)
        self.method_name = method_name

class WLISTENER(TraitWarning):
    """
    An event listener raised an exception, and nobody listens to the
    `listenererror` event of the emitting object.
    """
    fmt = "event listener for '%s' failed: %s"

class WLATECOMPLETE(TraitWarning):
    """
    A deferred result was completed after its timeout had already
    failed it; the late result is dropped.
    """
    fmt = "deferred completed after its %rs timeout; result dropped"

warnings = {name: cls for (name, cls) in globals().items()
            if isinstance(cls, type) and issubclass(cls, TraitWarning)
            and cls is not TraitWarning}
