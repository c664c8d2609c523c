# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# This module handles errors and warnings

__all__ = (
    'report',

    'is_warning_tag',
    'ignore_warning',
    'warning_is_ignored',
    'enable_warning',
    'set_include_tag',
    'suppress_errors',

    'site_name',

    'LogMessage',
    'TraitError',
    'TraitWarning',
    )

import sys
import contextlib

# Include warning and error ID's in reports
include_tag = False
def set_include_tag(val):
    global include_tag
    include_tag = val

def is_warning_tag(tag):
    from . import messages
    cls = getattr(messages, tag, None)
    return isinstance(cls, type) and issubclass(cls, TraitWarning)

# A set of ignored warnings
ignored_warnings = {}
def ignore_warning(tag):
    ignored_warnings[tag] = True

def enable_warning(tag):
    ignored_warnings[tag] = False

def warning_is_ignored(tag):
    return ignored_warnings.get(tag, False)

def site_name(site):
    '''Human readable name of the place a message refers to: a trait,
    an object, or a plain definition mapping'''
    if site is None:
        return '<unknown>'
    if isinstance(site, dict):
        return '<self>'
    name = getattr(site, 'name', None)
    if isinstance(name, str):
        return name
    return type(site).__name__

# Messages
#
# There are two kinds of messages, errors and warnings. All messages
# are represented as instances of LogMessage, or one of its
# subclasses. Errors are also exceptions and are raised where they are
# detected; warnings are passed to report().
#
class LogMessage(object):
    # The kind is for example 'error' or 'warning'.
    kind = None

    outfile = sys.stderr

    def __init__(self, site, *msgargs):
        # The site is the trait, object or definition that this
        # message refers to.
        self.site = site
        # The msg is the message to print.
        self.msg = self.fmt % msgargs

    # This is a utility method that prints a message prefixed with a
    # site indicator.  The msg should be a string without line breaks
    def print_site_message(self, site, msg):
        self.outfile.write("%s: %s\n" % (site_name(site), msg))

    def tag(self):
        return self.__class__.__name__

    def preprocess(self):
        '''Call before log when reporting. Return True to actually log
        or False to abort'''
        return True

    # This method can be overridden
    def log(self):
        lines = self.msg.splitlines() or ['']
        if include_tag:
            tag = ' ' + self.tag()
        else:
            tag = ''
        self.print_site_message(self.site,
                                '%s%s: %s' % (self.kind, tag, lines[0]))
        for l in lines[1:]:
            self.print_site_message(self.site, '  ' + l)

    def postprocess(self):
        pass

# This is a base class for warning messages
#
class TraitWarning(LogMessage):
    kind = "warning"

    def preprocess(self):
        # Don't print anything if the user asked us not to
        return not warning_is_ignored(self.tag())

# This is a base class for error messages
#
class TraitError(Exception, LogMessage):
    kind = "error"

    def __init__(self, site, *msgargs):
        LogMessage.__init__(self, site, *msgargs)
        Exception.__init__(self, self.msg)

store_errors = None

def report(logmessage):
    if store_errors is not None and isinstance(logmessage,
                                               (TraitError, TraitWarning)):
        store_errors.append(logmessage)
        return

    if logmessage.preprocess():
        logmessage.log()
        logmessage.postprocess()

@contextlib.contextmanager
def suppress_errors():
    global store_errors
    orig = store_errors
    store_errors = []
    try:
        yield store_errors
    except TraitError as e:
        store_errors.append(e)
    finally:
        store_errors = orig
