import inspect
import logging
from enum import Enum, auto
from typing import List, Tuple, Type


class ChunkPhase(Enum):
    '''Enum to state the actual phase of a chunk'''
    INIT      = 0
    UNPACKING = auto()
    DONE      = auto()


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_class_name(instance, name):
    return get_instance_from_chunk(instance, condition=lambda x: x.__class__.__name__ == name)


def get_instance_from_chunk(instance, condition):
    is_root = condition(instance)
    father = instance

    while not is_root:
        father = instance.father
        if father is None:
            raise AttributeError(f"no ancestor of {instance!r} satisfies the condition")

        is_root = condition(father)
        instance = father

    return father


class Dependency:
    '''This makes the relation between fields possible.

    Accessing an attribute holding a Dependency resolves it against the
    fields already unpacked, this is how the header of a format becomes a
    small dependency graph instead of an independent set of fields:

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    The syntax for defining the expression is inspired from module resolution
    with an extra element via the first char of the expression: we have the following

     - '.' indicates we refer to a field at the same level
     - '@' indicates the the first component is the name of a class

    A component made only of digits indexes an ArrayField, so that
    '.offsets.0' is the first element of the sibling named "offsets".
    If the last component is a method it is called.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def _resolve_wrt_class(self, instance: Type["Field"], fields_path: List[str]) -> Tuple[Type["Field"], List[str]]:
        class_name = fields_path[0][1:]
        self.logger.debug('resolve from class name: \'%s\'' % class_name)
        field = get_instance_from_class_name(instance, class_name)

        fields_path = fields_path[1:]  # skip the first one that is already resolved

        return field, fields_path

    def resolve_field(self, instance):
        self.logger.debug('trying to resolve \'%s\' using class \'%s\'' % (
            self.expression,
            self.__class__.__name__,
        ))

        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']
        fields_path = self.expression.split('.')

        # find the root the resolution starts
        if fields_path[0] != '':
            if fields_path[0].startswith('@'):  # we want to resolve wrt a class
                field, fields_path = self._resolve_wrt_class(instance, fields_path)
            else:
                field = get_root_from_chunk(instance)
                self.logger.debug(' resolve from root: \'%s\'' % field.__class__.__name__)
        else:  # we have a relative dependency
            field = instance.father
            self.logger.debug(' resolve from father: \'%s\'' % field.__class__.__name__)
            fields_path = fields_path[1:]  # skip the first one that is empty

        for component_name in fields_path:
            field = field[int(component_name)] if component_name.isdigit() else getattr(field, component_name)
            self.logger.debug(' resolved sub-component "%s" from "%s"' % (
                field.__class__.__name__, component_name))

        return field

    def _do_resolve(self, field):
        if inspect.ismethod(field):
            value = field()
        else:
            value = field.value

        self.logger.debug(' resolved with value %s' % value)

        return value

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        return self._do_resolve(self.resolve_field(instance))


class AlignedDependency(Dependency):
    '''Round the resolved value up to the next multiple of "alignment".'''

    def __init__(self, expression, alignment):
        super().__init__(expression)
        self._alignment = alignment

    def resolve(self, instance):
        value = super().resolve(instance)

        return (value + self._alignment - 1) & ~(self._alignment - 1)


class LinearDependency(Dependency):
    '''A base value plus a weighted sum of other fields.

    Each term is an expression or a couple (expression, factor):

        LinearDependency(0xc0, '.total_orders', ('.total_instruments', 4))

    resolves to 0xc0 + total_orders + 4 * total_instruments. With "minimum"
    the result never goes below it.
    '''

    def __init__(self, base, *terms, minimum=None):
        self._base = base
        self._terms = [_ if isinstance(_, tuple) else (_, 1) for _ in terms]
        self._minimum = minimum
        super().__init__(" + ".join(_[0] for _ in self._terms))

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._base:#x} + {self.expression})>'

    def resolve(self, instance):
        value = self._base
        for expression, factor in self._terms:
            value += factor * Dependency(expression).resolve(instance)

        if self._minimum is not None and value < self._minimum:
            self.logger.debug('%r resolved to %d, using %d instead', self, value, self._minimum)
            value = self._minimum

        return value


class PropertyDescriptor(object):
    """This the glue for dependency management: the attribute can hold
    a plain value or a Dependency resolved at every access."""

    def __init__(self, name: str, _type: type):
        self.name = name
        self.type = _type

    def __get__(self, instance: "Field", owner):
        if instance is None:
            return self

        data = instance.__dict__
        if self.name not in data:
            raise AttributeError(f"no '{self.name}' here!")

        value = data[self.name]

        if isinstance(value, Dependency):
            # a prototype is not attached to anything
            if instance.father is None:
                return None

            return value.resolve(instance)

        return value

    def __set__(self, instance: "Field", value):
        if not isinstance(value, (self.type, Dependency)):
            raise ValueError(f"A property must be of type {self.type} or a Dependency")

        instance.__dict__[self.name] = value
