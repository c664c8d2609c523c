# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Events, and the HasEvents trait that gives objects an emitter

from .logging import report
from .messages import EEVENTTYPE, WLISTENER
from .traits import Trait
import traitcomp.globals

__all__ = (
    'Event',
    'EventEmitter',
    'HasEvents',
)

class Event(object):
    '''An emitted event. Listeners are called with the items of args:
    the event itself, followed by the arguments given to emit().'''
    def __init__(self, type, args=None, source=None):
        if not isinstance(type, str) or not type:
            raise EEVENTTYPE(source, type)
        self.type = type
        self.args = [self] + list(args or ())
        self.source = source

    def __repr__(self):
        return '<Event %s>' % (self.type,)

class EventEmitter(object):
    count = 0

    def __init__(self, source=None):
        EventEmitter.count += 1
        self.id = EventEmitter.count
        self.source = self if source is None else source
        # event type -> list of listeners
        self.listeners = {}

    @staticmethod
    def of(source):
        '''The emitter attached to source by HasEvents, or None'''
        return getattr(source, traitcomp.globals.emitter_attribute, None)

    def get_listeners(self, event_type, create=False):
        listeners = self.listeners.get(event_type)
        if listeners is None and create:
            listeners = self.listeners[event_type] = []
        return listeners

    def on(self, event_type, listener=None):
        '''Subscribe listener to one event type, to several given as a
        space separated string, or to each type of a type -> listener
        dict'''
        if isinstance(event_type, dict):
            for (t, l) in event_type.items():
                self.on(t, l)
            return self
        event_types = event_type.split(' ')
        if len(event_types) > 1:
            for t in event_types:
                self.on(t, listener)
            return self
        self.get_listeners(event_type, True).append(listener)
        return self

    def off(self, event_type=None, listener=None):
        '''Unsubscribe listener, or every listener of the event type if
        no listener is given, or everything if no type is given'''
        if isinstance(event_type, dict):
            for (t, l) in event_type.items():
                self.off(t, l or None)
            return self
        if not event_type:
            self.listeners.clear()
            return self
        event_types = event_type.split(' ')
        if len(event_types) > 1:
            for t in event_types:
                self.off(t, listener)
            return self
        listeners = self.get_listeners(event_type)
        if not listeners:
            return self
        if listener is None:
            del listeners[:]
        else:
            listeners[:] = [l for l in listeners if l is not listener]
        return self

    def emit(self, event_type, *args):
        if isinstance(event_type, Event):
            event = event_type
            event.source = self.source
        else:
            event = Event(event_type, args, self.source)
        listeners = self.get_listeners(event.type)
        if not listeners:
            return self
        for listener in list(listeners):
            try:
                listener(*event.args)
            except Exception as e:
                if (event.type == 'listenererror'
                    or not self.get_listeners('listenererror')):
                    report(WLISTENER(self.source, event.type, e))
                else:
                    self.emit('listenererror', {
                        'original_event': event,
                        'error': e,
                        'listener': listener,
                    })
        return self

    def property_changed(self, property, value, previous_value):
        event_type = property.name + 'changed'
        if self.get_listeners(event_type):
            self.emit(event_type, {
                'property': property,
                'previous_value': previous_value,
                'value': value,
            })

def forward(obj, method_name, args):
    emitter = EventEmitter.of(obj)
    if emitter is None:
        emitter = EventEmitter(obj)
        setattr(obj, traitcomp.globals.emitter_attribute, emitter)
    return getattr(emitter, method_name)(*args)

def on(self, *args):
    forward(self, 'on', args)
    return self

def off(self, *args):
    forward(self, 'off', args)
    return self

def emit(self, *args):
    forward(self, 'emit', args)
    return self

HasEvents = Trait('HasEvents', {'on': on, 'off': off, 'emit': emit})
