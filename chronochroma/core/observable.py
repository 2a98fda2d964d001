"""
Observed properties and synchronous change dispatch.

Models declare their fields as :class:`ObservedProperty` descriptors and
derive dependent fields in observer methods. ``set_properties`` assigns a
batch of values, then runs the observers of every field whose value actually
changed, then notifies external listeners. Dispatch is synchronous and
re-entrant: observers may write further properties, which are dispatched
before the outer call returns.

Derived writes are wrapped in :meth:`Observable._deriving`, which sets the
update-source marker that observers consult to avoid re-deriving the field
that produced them.
"""
from __future__ import annotations
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Iterator, List, Mapping, Optional, Tuple

from ..utils.num_utils import same_value

log = logging.getLogger(__name__)

Listener = Callable[[str, Any, Any], None]


class UpdateSource(str, Enum):
    """Which kind of write the current derivation stems from."""
    COLOR_STRING = "color_string"
    COLOR_PROPERTIES = "color_properties"
    RESET = "reset"
    TIMEZONE = "timezone"
    SET_DATE = "set_date"
    BOUNDS = "bounds"
    DERIVED = "derived"


class ObservedProperty:
    """Descriptor for an observed model field.

    Reading returns the stored value; assigning is a single-field
    ``set_properties`` call, so observers and listeners run.

    Args:
        default: initial value, applied without running observers
        observer: name of a method called as ``observer(value, old)`` when
            the value changes
        readonly: if True, plain assignment raises AttributeError; the model
            writes it with ``set_properties(..., readonly=True)``

    Example:
        class Counter(Observable):
            count = ObservedProperty(0, observer="_count_changed")

            def _count_changed(self, value, old):
                ...
    """

    def __init__(self, default: Any = None, *, observer: Optional[str] = None, readonly: bool = False):
        self.default = default
        self.observer = observer
        self.readonly = readonly
        self.name: str = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return obj._data[self.name]

    def __set__(self, obj: "Observable", value: Any) -> None:
        if self.readonly:
            raise AttributeError(f"'{self.name}' is read-only on {obj.__class__.__name__}")
        obj.set_properties({self.name: value})

    def __repr__(self) -> str:
        flags = ", readonly" if self.readonly else ""
        return f"ObservedProperty({self.name!r}, default={self.default!r}{flags})"


class Observable:
    """
    Base class of the value models.

    Subclasses list their multi-field observers in ``observers`` as
    ``(method_name, (field, ...))`` pairs; such a method runs once per batch
    no matter how many of its fields changed, and reads the current values
    itself.
    """

    observers: ClassVar[Tuple[Tuple[str, Tuple[str, ...]], ...]] = ()

    _properties: ClassVar[Dict[str, ObservedProperty]] = {}
    _dependents: ClassVar[Dict[str, List[str]]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        properties: Dict[str, ObservedProperty] = {}
        dependents: Dict[str, List[str]] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, ObservedProperty):
                    properties[name] = attr
            for method, fields in vars(klass).get("observers", ()):
                for field in fields:
                    methods = dependents.setdefault(field, [])
                    if method not in methods:
                        methods.append(method)
        unknown = set(dependents) - set(properties)
        if unknown:
            raise ValueError(f"{cls.__name__} observes undeclared properties {sorted(unknown)}")
        cls._properties = properties
        cls._dependents = dependents

    def __init__(self, **values: Any) -> None:
        self._data: Dict[str, Any] = {name: prop.default for name, prop in self._properties.items()}
        self._listeners: Dict[str, List[Listener]] = {}
        self._update_source: Optional[UpdateSource] = None
        if values:
            self.set_properties(values)

    # ---- dispatch ----

    def _should_property_change(self, name: str, value: Any, old: Any) -> bool:
        """``-0.0`` and ``0`` differ, NaN does not differ from NaN."""
        return not same_value(value, old)

    def set_properties(self, values: Optional[Mapping[str, Any]] = None, *, readonly: bool = False, **kwargs: Any) -> List[str]:
        """
        Assign several fields at once, then run observers for the changed ones.

        Args:
            values: mapping of field names to values
            readonly: allow writing read-only fields
            **kwargs: more field values

        Returns:
            names of the fields whose value changed, in assignment order

        Raises:
            ValueError: for a name that is not an observed property
        """
        updates = dict(values or {})
        updates.update(kwargs)
        changed: Dict[str, Any] = {}
        for name, value in updates.items():
            prop = self._properties.get(name)
            if prop is None:
                raise ValueError(f"{self.__class__.__name__} has no observed property {name!r}")
            if prop.readonly and not readonly:
                raise AttributeError(f"'{name}' is read-only on {self.__class__.__name__}")
            old = self._data[name]
            if not self._should_property_change(name, value, old):
                continue
            self._data[name] = value
            changed[name] = old

        if not changed:
            return []
        log.debug("%s: %s changed", self.__class__.__name__, ", ".join(changed))

        ran = set()
        for name, old in changed.items():
            observer = self._properties[name].observer
            if observer is not None:
                getattr(self, observer)(self._data[name], old)
            for method in self._dependents.get(name, ()):
                if method not in ran:
                    ran.add(method)
                    getattr(self, method)()

        for name, old in changed.items():
            for callback in list(self._listeners.get(name, ())):
                callback(name, self._data[name], old)
        return list(changed)

    @contextmanager
    def _deriving(self, source: UpdateSource) -> Iterator[None]:
        """Mark writes made inside the block as derived from ``source``."""
        previous = self._update_source
        self._update_source = source
        try:
            yield
        finally:
            self._update_source = previous

    @property
    def is_deriving(self) -> bool:
        return self._update_source is not None

    # ---- listeners ----

    def add_listener(self, name: str, callback: Listener) -> None:
        """Call ``callback(name, value, old)`` after every change of ``name``."""
        if name not in self._properties:
            raise ValueError(f"{self.__class__.__name__} has no observed property {name!r}")
        if not callable(callback):
            raise TypeError("callback must be callable")
        self._listeners.setdefault(name, []).append(callback)

    def remove_listener(self, name: str, callback: Listener) -> None:
        callbacks = self._listeners.get(name, [])
        if callback in callbacks:
            callbacks.remove(callback)

    # ---- introspection ----

    def get_properties(self) -> Dict[str, Any]:
        return dict(self._data)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._data.items() if v is not None)
        return f"{self.__class__.__name__}({fields})"
