"""
Demonstrate the classic inheritance idioms on the explicit object model.

Each idiom builds its definitions once, when it is instantiated, and constructs
children from them in :py:meth:`Idiom.construct`. The trace of the idiom, including
the side effects of the initializers, is written to the ``stdout`` given to the idiom.
"""
import abc
import enum
from typing import (
    Any,
    Callable,
    Dict,
    Final,
    Optional,
    Sequence,
    TextIO,
    Type,
    Union,
)

from icontract import ensure, snapshot, DBC

from inheritance_idioms import stringify
from inheritance_idioms.common import Identifier
from inheritance_idioms.objects import (
    Constructor,
    Record,
    ThisBinding,
    assign,
    create,
    declare_class,
    inherit_prototype,
)

# pylint: disable=arguments-differ


class Strategy(enum.Enum):
    """Enumerate the construction strategies in the order of the demonstration."""

    PROTOTYPE_CHAIN = 1
    CONSTRUCTOR_STEALING = 2
    COMBINATION = 3
    FUNCTIONAL = 4
    PARASITIC = 5
    PARASITIC_COMBINATION = 6
    CLASS_SYNTAX = 7
    MIXIN = 8


class Tradeoffs:
    """Describe when an idiom is worth its price."""

    def __init__(
        self,
        title: str,
        advantages: str,
        disadvantages: str,
        suitable_for: Optional[str] = None,
    ) -> None:
        """Initialize with the given values."""
        self.title = title
        self.advantages = advantages
        self.disadvantages = disadvantages
        self.suitable_for = suitable_for


class Idiom(DBC):
    """Demonstrate a single inheritance idiom."""

    #: Strategy implemented by the idiom
    strategy: Strategy

    #: Prefix of the trace lines
    label: str

    tradeoffs: Tradeoffs

    def __init__(self, stdout: TextIO) -> None:
        """Initialize with the given values."""
        self.stdout = stdout

    def trace(self, *values: Any, topic: Optional[str] = None) -> None:
        """Write a single trace line with the ``values`` of the demonstration."""
        prefix = self.label if topic is None else f"{self.label} {topic}"
        values_str = " ".join(stringify.dump_value(value) for value in values)
        self.stdout.write(f"{prefix}: {values_str}\n")

    @abc.abstractmethod
    def construct(self, *args: Any) -> Record:
        """Construct a child with the idiom."""
        raise NotImplementedError()

    @abc.abstractmethod
    def demonstrate(self) -> None:
        """Construct a couple of children and trace their tradeoffs."""
        raise NotImplementedError()


class PrototypeChain(Idiom):
    """Set the child prototype to a single live parent instance."""

    strategy = Strategy.PROTOTYPE_CHAIN
    label = "prototype chain"
    tradeoffs = Tradeoffs(
        title="Prototype chain",
        advantages="Simple; the methods on the parent prototype are shared.",
        disadvantages=(
            "All the children share the reference-typed fields (such as lists) "
            "of the single parent instance; no arguments can be passed to "
            "the parent constructor since it runs before any child exists; "
            "there is no multiple inheritance."
        ),
        suitable_for="Sharing methods only, when there is no reference-typed state.",
    )

    def __init__(self, stdout: TextIO) -> None:
        super().__init__(stdout)

        def parent_body(this: Record) -> None:
            this.set("age", 40)
            this.set("colors", ["red"])

        def say(this: Record) -> None:
            self.trace(this.get("age"), topic="say")

        def append_color(this: Record, color: str) -> None:
            this.get("colors").append(color)
            self.trace(this.get("colors"))

        self.parent = Constructor(Identifier("Parent_1"), parent_body)
        self.parent.prototype.set("say", say)
        self.parent.prototype.set("appendColor", append_color)

        def child_body(this: Record) -> None:
            pass

        self.child = Constructor(Identifier("Child_1"), child_body)
        self.child.prototype = self.parent.new()
        self.child.prototype.label = "Child_1.prototype"
        self.child.prototype.set("constructor", self.child)

    @ensure(lambda self, result: result.prototype is self.child.prototype)
    def construct(self) -> Record:
        """Construct a child; nothing can be forwarded to the parent constructor."""
        return self.child.new()

    def demonstrate(self) -> None:
        first = self.construct()
        first.label = "child_1_1"
        first.call("say")
        self.trace(first.get("age"))
        first.call("appendColor", "blue")

        second = self.construct()
        second.label = "child_1_2"

        # The colors live on the shared prototype, so the second child
        # appends to the list of the first one.
        second.call("appendColor", "green")

        self.trace(first.get("colors") is second.get("colors"), topic="colors shared")


class ConstructorStealing(Idiom):
    """Run the parent constructor on each child to copy the instance fields."""

    strategy = Strategy.CONSTRUCTOR_STEALING
    label = "constructor stealing"
    tradeoffs = Tradeoffs(
        title="Constructor stealing",
        advantages=(
            "Every instance has its own instance fields so that no references "
            "are shared; arguments can be passed to the parent constructor."
        ),
        disadvantages=(
            "The methods on the parent prototype are not inherited; every child "
            "re-creates the methods defined in the parent constructor, "
            "which wastes memory."
        ),
        suitable_for=(
            "Inheriting the instance fields when the methods "
            "of the parent prototype are irrelevant."
        ),
    )

    def __init__(self, stdout: TextIO) -> None:
        super().__init__(stdout)

        def parent_body(this: Record, name: str) -> None:
            this.set("name", name)
            this.set("colors", ["red"])

            def say_fn(receiver: Record) -> None:
                self.trace(receiver.get("name"), topic="sayFn")

            this.set("sayFn", say_fn)

        def say_prototype(this: Record) -> None:
            self.trace(this.get("name"), topic="sayPrototype")

        self.parent = Constructor(Identifier("Parent_2"), parent_body)
        self.parent.prototype.set("sayPrototype", say_prototype)

        def child_body(this: Record, name: str) -> None:
            self.parent.call(this, name)

        self.child = Constructor(Identifier("Child_2"), child_body)

    @ensure(lambda result: result.has_own("sayFn") and result.has_own("colors"))
    def construct(self, name: str) -> Record:
        """Construct a child with its own copy of the parent's instance fields."""
        child = self.child.new(name)
        child.label = name
        return child

    def demonstrate(self) -> None:
        first = self.construct("child_2_1")
        first.call("sayFn")

        # Calling ``sayPrototype`` would raise a MethodNotFoundError since
        # the parent prototype is not on the chain of the child.
        self.trace(
            first.find("sayPrototype") is not None, topic="sayPrototype reachable"
        )

        second = self.construct("child_2_2")
        self.trace(first.get("sayFn") is second.get("sayFn"), topic="sayFn shared")


class Combination(Idiom):
    """Combine the constructor stealing with a live parent instance as prototype."""

    strategy = Strategy.COMBINATION
    label = "combination"
    tradeoffs = Tradeoffs(
        title="Combination",
        advantages=(
            "Every instance has its own instance fields while the methods are "
            "shared through the prototype chain."
        ),
        disadvantages=(
            "The parent constructor runs twice: once for each child and once when "
            "setting the child prototype. The same fields exist twice, on the "
            "instance and on the prototype, and the constructor side effects "
            "are duplicated."
        ),
        suitable_for=(
            "Inheriting both the instance fields and the shared methods "
            "if the double invocation does not matter."
        ),
    )

    #: Number of times the parent constructor has run so far
    initializer_calls: int

    def __init__(self, stdout: TextIO) -> None:
        super().__init__(stdout)
        self.initializer_calls = 0

        def parent_body(this: Record) -> None:
            this.set("name", "parent_3")
            this.set("colors", ["red"])
            self.initializer_calls += 1
            self.trace("Parent_3 constructor called")

        def say(this: Record) -> None:
            self.trace(this.get("name"), topic="say")

        self.parent = Constructor(Identifier("Parent_3"), parent_body)
        self.parent.prototype.set("say", say)

        def child_body(this: Record, key: str) -> None:
            self.parent.call(this)
            this.set("key", key)

        self.child = Constructor(Identifier("Child_3"), child_body)

        # The first invocation of the parent constructor
        self.child.prototype = self.parent.new()
        self.child.prototype.label = "Child_3.prototype"
        self.child.prototype.set("constructor", self.child)

    @snapshot(lambda self: self.initializer_calls, name="initializer_calls")
    @ensure(
        lambda self, OLD, result: (
            self.initializer_calls == OLD.initializer_calls + 1
            and result.has_own("colors")
        )
    )
    def construct(self, key: str) -> Record:
        """Construct a child, running the parent constructor once more."""
        child = self.child.new(key)
        child.label = key
        return child

    def demonstrate(self) -> None:
        first = self.construct("child_3_1")
        second = self.construct("child_3_2")

        self.trace(
            first.get("say") is second.get("say"), topic="prototype method shared"
        )
        self.trace(first.get("key"), second.get("key"), topic="instance fields")
        self.trace(self.initializer_calls, topic="parent constructor calls")


class Functional(Idiom):
    """Build a fresh record whose methods close over the construction arguments."""

    strategy = Strategy.FUNCTIONAL
    label = "functional"
    tradeoffs = Tradeoffs(
        title="Functional",
        advantages=(
            "Strong encapsulation without the side effects of the prototype chain; "
            "fits modules and composition well."
        ),
        disadvantages=(
            "The methods can not be shared through a prototype since each "
            "instance creates new functions, which costs memory."
        ),
    )

    @ensure(lambda result: result.prototype is None)
    def construct(self, name: str) -> Record:
        """Construct a child whose ``say`` captures the private ``name``."""

        def say(this: Record) -> None:  # pylint: disable=unused-argument
            self.trace(name, topic="say")

        return Record(members={"say": say}, label=name)

    def demonstrate(self) -> None:
        first = self.construct("child_4_1")
        first.call("say")
        second = self.construct("child_4_2")
        second.call("say")

        self.trace(first.get("say") is second.get("say"), topic="say shared")


class Parasitic(Idiom):
    """Delegate to an existing record and attach the enhancing methods directly."""

    strategy = Strategy.PARASITIC
    label = "parasitic"
    tradeoffs = Tradeoffs(
        title="Parasitic",
        advantages="Flexible; suited to create enhanced objects.",
        disadvantages=(
            "The attached methods are not shared and can not access the private "
            "variables of a parent constructor; less efficient and less clear "
            "than using the prototype chain directly."
        ),
    )

    def __init__(self, stdout: TextIO) -> None:
        super().__init__(stdout)

        self.parent = Record(
            members={"name": "original", "colors": ["red"]}, label="parent_5"
        )

    @ensure(
        lambda self, original, result: result.prototype is (
            original if original is not None else self.parent
        )
    )
    def construct(self, original: Optional[Record] = None) -> Record:
        """Construct a child delegating to ``original`` or to the idiom's parent."""
        clone = create(original if original is not None else self.parent)

        def say_hi(this: Record) -> None:
            self.trace(this.get("name"), topic="sayHi")

        clone.set("sayHi", say_hi)
        return clone

    def demonstrate(self) -> None:
        first = self.construct()
        first.label = "child_5_1"
        first.call("sayHi")

        # The name and the colors are only reachable through the original.
        self.trace(first.keys(), topic="reachable members")

        second = self.construct()
        second.label = "child_5_2"
        second.call("sayHi")

        self.trace(first.get("sayHi") is second.get("sayHi"), topic="sayHi shared")


class ParasiticCombination(Idiom):
    """Derive the child prototype from the parent prototype, not a parent instance."""

    strategy = Strategy.PARASITIC_COMBINATION
    label = "parasitic combination"
    tradeoffs = Tradeoffs(
        title="Parasitic combination",
        advantages=(
            "Avoids the double constructor invocation while keeping the instance "
            "fields per child and the methods shared on the prototype."
        ),
        disadvantages="Needs a helper to wire the prototypes by hand.",
        suitable_for=(
            "Classical object-oriented inheritance where no class syntax is available."
        ),
    )

    #: Number of times the parent constructor has run so far
    initializer_calls: int

    def __init__(self, stdout: TextIO) -> None:
        super().__init__(stdout)
        self.initializer_calls = 0

        def parent_body(this: Record, name: str) -> None:
            this.set("name", name)
            self.initializer_calls += 1
            self.trace("Parent_6 constructor called")

        def say(this: Record) -> None:
            self.trace(this.get("name"), topic="say")

        self.parent = Constructor(Identifier("Parent_6"), parent_body)
        self.parent.prototype.set("say", say)

        def child_body(this: Record, name: str, age: int) -> None:
            self.parent.call(this, name)
            this.set("age", age)

        self.child = Constructor(Identifier("Child_6"), child_body)
        inherit_prototype(child=self.child, parent=self.parent)

    @snapshot(lambda self: self.initializer_calls, name="initializer_calls")
    @ensure(
        lambda self, OLD: self.initializer_calls == OLD.initializer_calls + 1,
        "The parent constructor runs exactly once per child",
    )
    def construct(self, name: str, age: int) -> Record:
        """Construct a child, running the parent constructor exactly once."""
        child = self.child.new(name, age)
        child.label = name
        return child

    def demonstrate(self) -> None:
        first = self.construct("child_6_1", 10)
        second = self.construct("child_6_2", 20)
        first.call("say")
        second.call("say")

        self.trace(first.get("say") is second.get("say"), topic="say shared")
        self.trace(first.get("age"), second.get("age"), topic="instance fields")


class ClassSyntax(Idiom):
    """Declare the parent and the child as classes with explicit parent calls."""

    strategy = Strategy.CLASS_SYNTAX
    label = "class syntax"
    tradeoffs = Tradeoffs(
        title="Class syntax",
        advantages=(
            "Concise syntax close to the classical object-oriented programming; "
            "the parent initialization and the prototypes are wired automatically."
        ),
        disadvantages=(
            "Still prototypes under the hood; the prototype can not be set by "
            "hand and the receiver is unusable until the parent initializer ran."
        ),
        suitable_for="Modern code bases which need classical inheritance semantics.",
    )

    #: Number of times the parent initializer has run so far
    initializer_calls: int

    def __init__(self, stdout: TextIO) -> None:
        super().__init__(stdout)
        self.initializer_calls = 0

        def parent_init(this: Record, name: str) -> None:
            this.set("name", name)
            self.initializer_calls += 1

        def say(this: Record) -> None:
            self.trace(this.get("name"), topic="say")

        self.parent = declare_class(
            Identifier("Parent_7"), init=parent_init, methods={"say": say}
        )

        def child_init(
            this: ThisBinding, super_: Callable[..., None], name: str, age: int
        ) -> None:
            super_(name)
            this.set("age", age)

        self.child = declare_class(
            Identifier("Child_7"), init=child_init, extends=self.parent
        )

    @snapshot(lambda self: self.initializer_calls, name="initializer_calls")
    @ensure(
        lambda self, OLD: self.initializer_calls == OLD.initializer_calls + 1,
        "The parent initializer runs exactly once per child",
    )
    def construct(self, name: str, age: int) -> Record:
        """Construct an instance of the child class."""
        child = self.child.new(name, age)
        child.label = name
        return child

    def demonstrate(self) -> None:
        first = self.construct("child_7_1", 10)
        first.call("say")

        second = self.construct("child_7_2", 20)
        self.trace(first.get("say") is second.get("say"), topic="say shared")


class Mixin(Idiom):
    """Copy the members of several sources into a new record."""

    strategy = Strategy.MIXIN
    label = "mixin"
    tradeoffs = Tradeoffs(
        title="Mixin",
        advantages=(
            "Simple and flexible; avoids deep inheritance trees "
            "in favor of composition over inheritance."
        ),
        disadvantages=(
            "The members are copies, no inheritance chain is established "
            "and the names may collide."
        ),
    )

    def __init__(self, stdout: TextIO) -> None:
        super().__init__(stdout)

        def eat(this: Record) -> None:  # pylint: disable=unused-argument
            self.trace("eat")

        def walk(this: Record) -> None:  # pylint: disable=unused-argument
            self.trace("walk")

        self.eater = Record(members={"eat": eat}, label="Parent_8")
        self.walker = Record(members={"walk": walk}, label="Child_8")

    @ensure(lambda result: result.prototype is None)
    def construct(self, *sources: Record) -> Record:
        """
        Merge the ``sources`` into a new record, the rightmost winning.

        If no sources are given, the idiom's ``eater`` and ``walker`` are merged.
        """
        if len(sources) == 0:
            sources = (self.eater, self.walker)

        return assign(Record(label="mixin"), *sources)

    def demonstrate(self) -> None:
        merged = self.construct()
        merged.label = "child_8_1"
        merged.call("eat")
        merged.call("walk")

        self.stdout.write(
            f"{self.label} members: "
            f"{stringify.dump(stringify.record_to_entity(merged))}\n"
        )


IDIOM_CLASSES: Final[Sequence[Type[Idiom]]] = [
    PrototypeChain,
    ConstructorStealing,
    Combination,
    Functional,
    Parasitic,
    ParasiticCombination,
    ClassSyntax,
    Mixin,
]

assert [cls.strategy for cls in IDIOM_CLASSES] == list(Strategy)


@ensure(lambda strategy, result: result.strategy is strategy)
def idiom_class(strategy: Strategy) -> Type[Idiom]:
    """Retrieve the idiom class implementing the ``strategy``."""
    return IDIOM_CLASSES[strategy.value - 1]


class Demonstrator:
    """
    Construct children with any of the strategies.

    The idioms are instantiated lazily on the first use of their strategy, so that
    the side effects of building the parent definitions only show up for
    the strategies in use. Afterwards the definitions are re-used so that
    the siblings constructed with the same strategy share them.
    """

    def __init__(self, stdout: TextIO) -> None:
        """Initialize with the given values."""
        self.stdout = stdout
        self._idioms = dict()  # type: Dict[Strategy, Idiom]

    @ensure(lambda strategy, result: result.strategy is Strategy(strategy))
    def idiom(self, strategy: Union[Strategy, int]) -> Idiom:
        """
        Retrieve the idiom of the ``strategy``, instantiating it if necessary.

        The ``strategy`` can also be given by its number.

        :raise: :py:class:`ValueError` if there is no strategy with the number
        """
        strategy = Strategy(strategy)

        idiom = self._idioms.get(strategy, None)
        if idiom is None:
            idiom = idiom_class(strategy)(self.stdout)
            self._idioms[strategy] = idiom

        return idiom

    def construct(self, strategy: Union[Strategy, int], *args: Any) -> Record:
        """Construct a child with the ``strategy`` given the construction ``args``."""
        return self.idiom(strategy).construct(*args)
