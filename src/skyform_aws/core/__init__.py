"""Resource model, state, finders and change planning."""

from .diff import ChangeType, ResourceChange, apply_change, plan_change, plan_delete
from .diffable import Diffable, FieldError, compact, is_set
from .fields import attr, kebab
from .finder import AwsFinder, paginate
from .registry import finder_class, register, register_finder, resource_class, resource_types
from .resource import AwsResource
from .state import State
from .ui import ProviderUI

__all__ = [
    'AwsFinder',
    'AwsResource',
    'ChangeType',
    'Diffable',
    'FieldError',
    'ProviderUI',
    'ResourceChange',
    'State',
    'apply_change',
    'attr',
    'compact',
    'finder_class',
    'is_set',
    'kebab',
    'paginate',
    'plan_change',
    'plan_delete',
    'register',
    'register_finder',
    'resource_class',
    'resource_types',
]
