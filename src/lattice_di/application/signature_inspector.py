import importlib
import inspect
import logging
import types
import weakref
from typing import (
    Annotated,
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from lattice_di.domain import ConstructionError, Inject, ParameterDescriptor

logger = logging.getLogger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_UNION_ORIGINS = tuple(origin for origin in (Union, getattr(types, "UnionType", None)) if origin is not None)
_NONE_TYPE = type(None)


class SignatureInspector:
    """Describes callables and constructors as lists of ``ParameterDescriptor``.

    Uses Python's inspect module and type hints. Descriptions are computed once
    per callable and cached for as long as the callable is alive.

    Attributes:
        _cache: Descriptors keyed weakly by the inspected function or class, then
            by the way it is called (plain call, bound method, constructor).
    """

    def __init__(self) -> None:
        """Initialize the inspector with an empty weak-keyed cache."""
        self._cache: "weakref.WeakKeyDictionary[Any, Dict[str, List[ParameterDescriptor]]]" = (
            weakref.WeakKeyDictionary()
        )

    def describe(self, func: Callable[..., Any]) -> List[ParameterDescriptor]:
        """Describe the parameters of an arbitrary callable.

        Bound methods are cached under their underlying function, so the
        cache never keeps the instance alive.

        Args:
            func: Function, method, lambda or callable object.

        Returns:
            Descriptors of every parameter except ``*args`` and ``**kwargs``.

        Raises:
            ConstructionError: If the signature or its type hints cannot be inspected.
        """
        kind = "bound" if inspect.ismethod(func) else "call"
        return self._cached(
            getattr(func, "__func__", func),
            kind,
            lambda: self._describe(func, func, skip_first=False),
        )

    def describe_constructor(self, cls: type) -> List[ParameterDescriptor]:
        """Describe the ``__init__`` parameters of a class, excluding ``self``.

        Example:
            >>> class UserService:
            ...     def __init__(self, repo: UserRepository, page_size: int = 20):
            ...         ...
            >>> [d.name for d in SignatureInspector().describe_constructor(UserService)]
            ['repo', 'page_size']
        """
        return self._cached(cls, "__init__", lambda: self._describe(cls, cls.__init__, skip_first=True))

    def _cached(
        self,
        key: Any,
        kind: str,
        factory: Callable[[], List[ParameterDescriptor]],
    ) -> List[ParameterDescriptor]:
        try:
            entries = self._cache.get(key)
            if entries is None:
                entries = self._cache[key] = {}
        except TypeError:
            # Unhashable or not weakly referenceable; described on every call
            return factory()

        if kind not in entries:
            entries[kind] = factory()
        return entries[kind]

    def _describe(self, owner: Any, target: Callable[..., Any], skip_first: bool) -> List[ParameterDescriptor]:
        owner_name = getattr(owner, "__qualname__", repr(owner))

        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError) as e:
            raise ConstructionError(owner_name, f"signature cannot be inspected ({e})") from e

        hints = self._type_hints(owner_name, target)

        parameters = list(signature.parameters.values())
        if skip_first and parameters:
            parameters = parameters[1:]

        descriptors = []
        for param in parameters:
            if param.kind in _SKIPPED_KINDS:
                continue

            annotation = hints.get(param.name, param.annotation)
            declared_type, explicit_identifier = self._unwrap(annotation)

            descriptors.append(
                ParameterDescriptor(
                    position=len(descriptors),
                    name=param.name,
                    keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
                    declared_type=declared_type,
                    has_default=param.default is not inspect.Parameter.empty,
                    default=None if param.default is inspect.Parameter.empty else param.default,
                    explicit_identifier=explicit_identifier,
                )
            )

        logger.debug("Described %d parameter(s) of %s", len(descriptors), owner_name)
        return descriptors

    @staticmethod
    def _type_hints(owner_name: str, target: Callable[..., Any]) -> Dict[str, Any]:
        hints_target = target
        if inspect.isclass(target):
            hints_target = target.__init__
        elif not (inspect.isfunction(target) or inspect.ismethod(target)) and callable(target):
            hints_target = getattr(type(target), "__call__", target)

        try:
            return get_type_hints(hints_target, include_extras=True)
        except NameError as e:
            raise ConstructionError(owner_name, f"type hints cannot be evaluated ({e})") from e
        except TypeError:
            # Builtins and partials carry no evaluable hints; fall back to raw annotations
            return {}

    @classmethod
    def _unwrap(cls, annotation: Any) -> Tuple[Optional[Any], Optional[str]]:
        """Split an annotation into its declared type and explicit identifier.

        ``Annotated`` is looked up at the top level and inside ``Optional`` /
        ``Union`` members; a union with a single non-None member declares that
        member's type.
        """
        if annotation is inspect.Parameter.empty or isinstance(annotation, str):
            return None, None

        origin = get_origin(annotation)

        if origin is Annotated:
            markers = [meta for meta in annotation.__metadata__ if isinstance(meta, Inject)]
            declared_type, inner_identifier = cls._unwrap(get_args(annotation)[0])
            return declared_type, markers[0].identifier if markers else inner_identifier

        if origin in _UNION_ORIGINS:
            members = [cls._unwrap(arg) for arg in get_args(annotation) if arg is not _NONE_TYPE]
            identifiers = [identifier for _, identifier in members if identifier is not None]
            declared_type = members[0][0] if len(members) == 1 else annotation
            return declared_type, identifiers[0] if identifiers else None

        return annotation, None


def import_type(name: str) -> Any:
    """Import an object from its fully-qualified dotted name.

    Both ``package.module.Class`` and nested ``package.module.Outer.Inner``
    are supported; the longest importable module prefix wins.

    Raises:
        ConstructionError: If no module prefix imports or the attribute path does not exist.
    """
    parts = name.split(".")
    last_error: Optional[Exception] = None

    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            resolved: Any = importlib.import_module(module_name)
        except ImportError as e:
            last_error = e
            continue

        try:
            for attribute in parts[split:]:
                resolved = getattr(resolved, attribute)
        except AttributeError as e:
            raise ConstructionError(name, f"class {name} does not exist") from e
        return resolved

    raise ConstructionError(name, f"class {name} does not exist") from last_error
