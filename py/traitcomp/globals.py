# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Global variables and conventions

# Prefix for the instance attribute where a property stores its value
# when no explicit storage name is given
storage_name_prefix = '_'

# Name of the attribute that holds the Meta of a composed object
meta_attribute = '__meta__'

# name -> value. Members injected into every resolved object unless
# its own definition provides them.
default_members = {}

# Counter used to name traits created without a name
anonymous_traits = 0

# Attribute where HasEvents keeps the EventEmitter of an object
emitter_attribute = '_event_emitter'

# Incremented by every structural change of a trait; the cached member
# table of a trait is valid for one generation
trait_generation = 0
