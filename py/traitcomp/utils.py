# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Small helpers shared by traits and composed objects

import inspect

from .messages import EPENDING

__all__ = (
    'extend',
    'noop',
    'pending',
    'pending_message',
)

def extend(target, source, recursive=False, member_copy=None):
    '''Copy the members of the mapping source into target and return
    target.

    With recursive, a dict found on both sides is merged instead of
    replaced; lists are always replaced. member_copy(target, source,
    name) takes over the copying of single members, which makes it
    possible to extend things that are not dicts.'''
    if not isinstance(source, dict):
        return target
    for (name, value) in source.items():
        if (recursive and isinstance(target, dict)
            and isinstance(target.get(name), dict)
            and isinstance(value, dict)):
            extend(target[name], value, recursive, member_copy)
        elif member_copy:
            member_copy(target, source, name)
        else:
            target[name] = value
    return target

def noop(*args, **kwargs):
    pass

def pending(message=None):
    '''Raise EPENDING, naming the function that called us'''
    caller = inspect.currentframe().f_back
    method_name = caller.f_code.co_name if caller else None
    if method_name == '<module>':
        method_name = None
    if message is None:
        message = 'implementation is pending'
        if method_name:
            message += ', at method: "%s"' % (method_name,)
    raise EPENDING(None, message, method_name)

def pending_message(message=None):
    '''A member that raises EPENDING with the given message when
    invoked'''
    def pending_member(self, *args, **kwargs):
        raise EPENDING(self, message or 'implementation is pending', None)
    return pending_member
