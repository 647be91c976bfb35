"""
Model objects which delegate unresolved member lookups to a prototype.

A :py:class:`Record` holds its own members and an optional *prototype*, the shared
lookup target consulted for members which the record does not own. The prototype is
a back-reference and never an ownership edge: many records can point to the same
prototype, and they all observe the same members through it.

Methods are plain callables stored as member values. They receive the receiver
record as their first argument when invoked through :py:meth:`Record.call`. Two
records share a method if and only if the resolved member values are identical.

The rest of the module builds the classic construction primitives on top of
the records: constructor functions (:py:class:`Constructor`), ``create``,
``assign`` and class declarations with explicit parent initialization
(:py:func:`declare_class`).
"""
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
)

import sortedcontainers
from icontract import require, ensure

from inheritance_idioms.common import Identifier, IDENTIFIER_RE


class MemberNotFoundError(KeyError):
    """Signal that a member is neither owned by a record nor by its prototypes."""

    def __init__(self, name: str, record: "Record") -> None:
        """Initialize with the given values."""
        super().__init__(name)
        self.name = name
        self.record = record

    def __str__(self) -> str:
        return (
            f"The member {self.name!r} could not be found "
            f"on {self.record.label} nor on its prototypes"
        )


class MethodNotFoundError(AttributeError):
    """
    Signal that a method has not been attached to a record's lookup chain.

    This is the case, for example, when a method lives on a prototype which
    the record never delegates to.
    """

    def __init__(self, name: str, record: "Record") -> None:
        """Initialize with the given values."""
        super().__init__(f"{record.label}.{name} is not a method")
        self.name = name
        self.record = record


class UninitializedReceiverError(RuntimeError):
    """Signal that a derived initializer misused the parent initialization."""


def _reachable(record: "Record", target: "Record") -> bool:
    """Check whether ``target`` is on the prototype chain starting at ``record``."""
    return any(an_record is target for an_record in record.chain())


class Record:
    """Represent an object with its own members and an optional prototype."""

    #: Human-readable name used in the trace and in error messages
    label: str

    def __init__(
        self,
        members: Optional[Mapping[str, Any]] = None,
        prototype: Optional["Record"] = None,
        label: Optional[str] = None,
    ) -> None:
        """Initialize with the given values."""
        self.label = label if label is not None else "an anonymous record"
        self._members = dict()  # type: Dict[str, Any]
        self._prototype = None  # type: Optional[Record]

        if members is not None:
            for name, value in members.items():
                self.set(name, value)

        self.prototype = prototype

    @property
    def prototype(self) -> Optional["Record"]:
        """Return the shared lookup target, if any."""
        return self._prototype

    @prototype.setter
    @require(
        lambda self, value: value is None or not _reachable(value, self),
        "No cycles in the prototype chain",
    )
    def prototype(self, value: Optional["Record"]) -> None:
        self._prototype = value

    def chain(self) -> Iterator["Record"]:
        """Iterate over the record itself followed by its prototypes."""
        record = self  # type: Optional[Record]
        while record is not None:
            yield record
            record = record._prototype  # pylint: disable=protected-access

    def has_own(self, name: str) -> bool:
        """Return ``True`` if the member ``name`` is stored on the record itself."""
        return name in self._members

    def own_keys(self) -> List[str]:
        """List the names of the own members in the insertion order."""
        return list(self._members.keys())

    def own_items(self) -> List[Tuple[str, Any]]:
        """List the own members as ``(name, value)`` in the insertion order."""
        return list(self._members.items())

    def keys(self) -> List[str]:
        """List the names of all the reachable members, sorted."""
        names = sortedcontainers.SortedSet()  # type: sortedcontainers.SortedSet[str]
        for record in self.chain():
            names.update(record.own_keys())

        return list(names)

    def owner_of(self, name: str) -> Optional["Record"]:
        """Find the record on the chain which owns the member ``name``."""
        for record in self.chain():
            if record.has_own(name):
                return record

        return None

    def find(self, name: str) -> Optional[Any]:
        """Resolve the member ``name`` through the chain, or return ``None``."""
        owner = self.owner_of(name)
        if owner is None:
            return None

        return owner._members[name]  # pylint: disable=protected-access

    def get(self, name: str) -> Any:
        """Resolve the member ``name`` through the chain."""
        owner = self.owner_of(name)
        if owner is None:
            raise MemberNotFoundError(name=name, record=self)

        return owner._members[name]  # pylint: disable=protected-access

    @require(lambda name: IDENTIFIER_RE.fullmatch(name))
    @ensure(lambda self, name: self.has_own(name))
    def set(self, name: str, value: Any) -> None:
        """
        Store the member ``name`` on the record itself.

        The prototypes are never written to, so the member of the same name on
        a prototype is merely shadowed.
        """
        self._members[name] = value

    def call(self, name: str, *args: Any) -> Any:
        """
        Invoke the method ``name`` with the record as the receiver.

        :raise: :py:class:`MethodNotFoundError` if the method is not reachable
        """
        method = self.find(name)
        if method is None or not callable(method):
            raise MethodNotFoundError(name=name, record=self)

        return method(self, *args)

    def __repr__(self) -> str:
        return f"Record({self.label!r}, own={self.own_keys()!r})"


@ensure(lambda prototype, result: result.prototype is prototype)
@ensure(lambda result: len(result.own_keys()) == 0)
def create(prototype: Optional[Record], label: Optional[str] = None) -> Record:
    """Create an empty record delegating to ``prototype`` without initialization."""
    return Record(prototype=prototype, label=label)


@ensure(lambda target, result: result is target)
def assign(target: Record, *sources: Record) -> Record:
    """
    Copy the own members of ``sources`` onto ``target``.

    The sources are copied in order so that the rightmost source wins on a name
    collision. The values are copied at the time of the call; no delegation
    between ``target`` and ``sources`` is established.
    """
    for source in sources:
        for name, value in source.own_items():
            target.set(name, value)

    return target


class Constructor:
    """
    Represent a constructor function together with its prototype.

    The ``body`` receives the receiver as its first argument followed by
    the arguments of the construction.
    """

    #: Prototype given to the records constructed with :py:meth:`new`
    prototype: Record

    def __init__(self, name: Identifier, body: Callable[..., None]) -> None:
        """Initialize with the given values and a fresh prototype."""
        self.name = name
        self.body = body

        self.prototype = Record(label=f"{name}.prototype")
        self.prototype.set("constructor", self)

    def new(self, *args: Any) -> Record:
        """Construct a record delegating to :py:attr:`prototype` and initialize it."""
        receiver = Record(prototype=self.prototype, label=f"a {self.name} instance")
        self.body(receiver, *args)
        return receiver

    def call(self, receiver: Record, *args: Any) -> None:
        """Run the body on an existing ``receiver``, leaving its prototype intact."""
        self.body(receiver, *args)

    def __repr__(self) -> str:
        return f"Constructor({self.name!r})"


@ensure(
    lambda child, parent: (
        child.prototype.prototype is parent.prototype
        and child.prototype.find("constructor") is child
    )
)
def inherit_prototype(child: Constructor, parent: Constructor) -> None:
    """
    Let the prototype of ``child`` delegate to the prototype of ``parent``.

    The parent constructor is not run, so no parent instance fields end up on
    the child prototype.
    """
    child.prototype = create(parent.prototype, label=f"{child.name}.prototype")
    child.prototype.set("constructor", child)


class ThisBinding:
    """
    Guard the receiver of a derived initializer.

    The receiver becomes accessible only after the parent initializer ran.
    """

    def __init__(self, receiver: Record, class_name: Identifier) -> None:
        """Initialize with the given values as unbound."""
        self._receiver = receiver
        self._class_name = class_name
        self._bound = False

    @property
    def bound(self) -> bool:
        """Return ``True`` if the parent initializer already ran."""
        return self._bound

    @require(lambda self: not self.bound)
    def bind(self) -> None:
        """Mark the receiver as initialized by the parent initializer."""
        self._bound = True

    @property
    def receiver(self) -> Record:
        """Return the receiver if the parent initializer already ran."""
        if not self._bound:
            raise UninitializedReceiverError(
                f"The parent initializer must be called in the initializer "
                f"of {self._class_name} before accessing the receiver"
            )

        return self._receiver

    def get(self, name: str) -> Any:
        """Resolve the member ``name`` on the receiver."""
        return self.receiver.get(name)

    def set(self, name: str, value: Any) -> None:
        """Store the member ``name`` on the receiver."""
        self.receiver.set(name, value)

    def call(self, name: str, *args: Any) -> Any:
        """Invoke the method ``name`` on the receiver."""
        return self.receiver.call(name, *args)


class ClassDeclaration:
    """
    Represent a class declared with :py:func:`declare_class`.

    The methods live on :py:attr:`prototype`, which delegates to the prototype of
    the parent class, if any.
    """

    def __init__(
        self,
        name: Identifier,
        init: Callable[..., None],
        methods: Mapping[str, Callable[..., Any]],
        extends: Optional["ClassDeclaration"],
    ) -> None:
        """Initialize with the given values and build the prototype."""
        self.name = name
        self.init = init
        self.extends = extends

        self.prototype = Record(
            members=methods,
            prototype=extends.prototype if extends is not None else None,
            label=f"{name}.prototype",
        )
        self.prototype.set("constructor", self)

    def new(self, *args: Any) -> Record:
        """Construct a record of this class and run the chain of initializers."""
        receiver = Record(prototype=self.prototype, label=f"a {self.name} instance")
        self.initialize(receiver, *args)
        return receiver

    def initialize(self, receiver: Record, *args: Any) -> None:
        """
        Run the initializer of this class on ``receiver``.

        A base initializer receives the ``receiver`` directly. A derived initializer
        receives a :py:class:`ThisBinding` and the parent initializer which it has to
        call exactly once before it accesses the receiver.
        """
        if self.extends is None:
            self.init(receiver, *args)
            return

        parent = self.extends
        this = ThisBinding(receiver=receiver, class_name=self.name)

        def super_(*parent_args: Any) -> None:
            if this.bound:
                raise UninitializedReceiverError(
                    f"The parent initializer has been called more than once "
                    f"in the initializer of {self.name}"
                )

            parent.initialize(receiver, *parent_args)
            this.bind()

        self.init(this, super_, *args)

        if not this.bound:
            raise UninitializedReceiverError(
                f"The initializer of {self.name} returned "
                f"without calling the parent initializer"
            )

    def __repr__(self) -> str:
        return f"ClassDeclaration({self.name!r})"


def declare_class(
    name: Identifier,
    init: Callable[..., None],
    methods: Optional[Mapping[str, Callable[..., Any]]] = None,
    extends: Optional[ClassDeclaration] = None,
) -> ClassDeclaration:
    """
    Declare a class with the methods shared through its prototype.

    For a base class, ``init`` is called as ``init(this, *args)``. For a derived
    class, it is called as ``init(this, super_, *args)`` where ``this`` is
    a :py:class:`ThisBinding` and ``super_`` runs the parent initializer.
    """
    return ClassDeclaration(
        name=name,
        init=init,
        methods=methods if methods is not None else dict(),
        extends=extends,
    )
