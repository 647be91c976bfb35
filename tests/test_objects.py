# pylint: disable=missing-docstring

import unittest
from typing import Any, List

import icontract

from inheritance_idioms.common import Identifier
from inheritance_idioms.objects import (
    Constructor,
    MemberNotFoundError,
    MethodNotFoundError,
    Record,
    ThisBinding,
    UninitializedReceiverError,
    assign,
    create,
    declare_class,
    inherit_prototype,
)


def _noop(this: Record) -> None:  # pylint: disable=unused-argument
    pass


class Test_record(unittest.TestCase):
    def test_own_member_shadows_prototype(self) -> None:
        prototype = Record(members={"name": "prototype"})
        record = Record(members={"name": "own"}, prototype=prototype)

        self.assertEqual("own", record.get("name"))
        self.assertEqual("prototype", prototype.get("name"))

    def test_lookup_walks_the_chain(self) -> None:
        grand_parent = Record(members={"x": 1})
        parent = Record(prototype=grand_parent)
        record = Record(prototype=parent)

        self.assertEqual(1, record.get("x"))
        self.assertIs(grand_parent, record.owner_of("x"))
        self.assertFalse(record.has_own("x"))

    def test_set_never_writes_to_prototype(self) -> None:
        prototype = Record(members={"x": 1})
        record = Record(prototype=prototype)

        record.set("x", 2)

        self.assertEqual(2, record.get("x"))
        self.assertEqual(1, prototype.get("x"))

    def test_get_missing_member(self) -> None:
        record = Record(label="something")

        with self.assertRaises(MemberNotFoundError) as context:
            record.get("missing")

        self.assertEqual(
            "The member 'missing' could not be found "
            "on something nor on its prototypes",
            str(context.exception),
        )
        self.assertIsNone(record.find("missing"))

    def test_keys_are_sorted_and_unique(self) -> None:
        prototype = Record(members={"b": 1, "a": 2})
        record = Record(members={"c": 3, "b": 4}, prototype=prototype)

        self.assertListEqual(["a", "b", "c"], record.keys())
        self.assertListEqual(["c", "b"], record.own_keys())

    def test_call_passes_the_receiver(self) -> None:
        receivers = []  # type: List[Record]

        def method(this: Record, value: int) -> int:
            receivers.append(this)
            return value + 1

        prototype = Record(members={"method": method})
        record = Record(prototype=prototype)

        self.assertEqual(2, record.call("method", 1))
        self.assertListEqual([record], receivers)

    def test_call_missing_method(self) -> None:
        record = Record(label="something")

        with self.assertRaises(MethodNotFoundError) as context:
            record.call("missing")

        self.assertEqual("something.missing is not a method", str(context.exception))

    def test_call_non_callable_member(self) -> None:
        record = Record(members={"age": 40})

        with self.assertRaises(MethodNotFoundError):
            record.call("age")

    def test_cycle_in_prototype_chain(self) -> None:
        first = Record()
        second = Record(prototype=first)

        with self.assertRaises(icontract.ViolationError):
            first.prototype = second

    def test_invalid_member_name(self) -> None:
        record = Record()

        with self.assertRaises(icontract.ViolationError):
            record.set("not an identifier", 1)


class Test_create(unittest.TestCase):
    def test_delegates_without_copying(self) -> None:
        original = Record(members={"name": "original", "colors": ["red"]})

        clone = create(original)

        self.assertIs(original, clone.prototype)
        self.assertListEqual([], clone.own_keys())
        self.assertEqual("original", clone.get("name"))

    def test_writes_stay_on_created_record(self) -> None:
        original = Record(members={"name": "original"})

        clone = create(original)
        clone.set("name", "clone")

        self.assertEqual("original", original.get("name"))
        self.assertEqual("clone", clone.get("name"))


class Test_assign(unittest.TestCase):
    def test_merges_all_sources(self) -> None:
        def eat(this: Record) -> None:  # pylint: disable=unused-argument
            pass

        def walk(this: Record) -> None:  # pylint: disable=unused-argument
            pass

        merged = assign(Record(), Record({"eat": eat}), Record({"walk": walk}))

        self.assertIs(eat, merged.get("eat"))
        self.assertIs(walk, merged.get("walk"))

    def test_rightmost_wins(self) -> None:
        merged = assign(Record(), Record({"x": 1, "y": 1}), Record({"x": 2}))

        self.assertEqual(2, merged.get("x"))
        self.assertEqual(1, merged.get("y"))

    def test_no_delegation_to_sources(self) -> None:
        source = Record({"x": 1})
        merged = assign(Record(), source)

        source.set("x", 2)
        source.set("y", 3)

        self.assertIsNone(merged.prototype)
        self.assertEqual(1, merged.get("x"))
        self.assertIsNone(merged.find("y"))

    def test_inherited_members_are_not_copied(self) -> None:
        source = Record(prototype=Record({"inherited": 1}))

        merged = assign(Record(), source)

        self.assertIsNone(merged.find("inherited"))


class Test_constructor(unittest.TestCase):
    def test_new_delegates_to_prototype(self) -> None:
        def body(this: Record, name: str) -> None:
            this.set("name", name)

        constructor = Constructor(Identifier("Something"), body)

        record = constructor.new("x")

        self.assertIs(constructor.prototype, record.prototype)
        self.assertIs(constructor, record.get("constructor"))
        self.assertEqual("x", record.get("name"))
        self.assertFalse(record.has_own("constructor"))

    def test_call_keeps_the_prototype_of_receiver(self) -> None:
        def body(this: Record) -> None:
            this.set("x", 1)

        constructor = Constructor(Identifier("Something"), body)
        receiver = Record()

        constructor.call(receiver)

        self.assertIsNone(receiver.prototype)
        self.assertEqual(1, receiver.get("x"))

    def test_replacing_prototype_keeps_existing_records(self) -> None:
        constructor = Constructor(Identifier("Something"), _noop)
        before = constructor.new()

        constructor.prototype = Record()
        after = constructor.new()

        self.assertIsNot(before.prototype, after.prototype)

    def test_inherit_prototype_does_not_run_parent(self) -> None:
        calls = []  # type: List[str]

        def parent_body(this: Record) -> None:  # pylint: disable=unused-argument
            calls.append("parent")

        def method(this: Record) -> str:  # pylint: disable=unused-argument
            return "method"

        parent = Constructor(Identifier("Parent"), parent_body)
        parent.prototype.set("method", method)
        child = Constructor(Identifier("Child"), _noop)

        inherit_prototype(child=child, parent=parent)

        self.assertListEqual([], calls)
        self.assertIs(child, child.new().get("constructor"))
        self.assertEqual("method", child.new().call("method"))
        self.assertFalse(child.prototype.has_own("method"))


class Test_declare_class(unittest.TestCase):
    def test_derived_initializer(self) -> None:
        def parent_init(this: Record, name: str) -> None:
            this.set("name", name)

        def say(this: Record) -> Any:
            return this.get("name")

        parent = declare_class(
            Identifier("Parent"), init=parent_init, methods={"say": say}
        )

        def child_init(this: ThisBinding, super_: Any, name: str, age: int) -> None:
            super_(name)
            this.set("age", age)

        child = declare_class(Identifier("Child"), init=child_init, extends=parent)

        record = child.new("x", 10)

        self.assertEqual("x", record.call("say"))
        self.assertEqual(10, record.get("age"))
        self.assertIs(child.prototype, record.prototype)
        self.assertIs(parent.prototype, child.prototype.prototype)
        self.assertIs(child, record.get("constructor"))

    def test_receiver_accessed_before_parent_initializer(self) -> None:
        parent = declare_class(Identifier("Parent"), init=_noop)

        def child_init(this: ThisBinding, super_: Any) -> None:
            this.set("age", 10)
            super_()

        child = declare_class(Identifier("Child"), init=child_init, extends=parent)

        with self.assertRaises(UninitializedReceiverError):
            child.new()

    def test_parent_initializer_not_called(self) -> None:
        parent = declare_class(Identifier("Parent"), init=_noop)

        def child_init(this: ThisBinding, super_: Any) -> None:
            pass

        child = declare_class(Identifier("Child"), init=child_init, extends=parent)

        with self.assertRaises(UninitializedReceiverError):
            child.new()

    def test_parent_initializer_called_twice(self) -> None:
        parent = declare_class(Identifier("Parent"), init=_noop)

        def child_init(this: ThisBinding, super_: Any) -> None:
            super_()
            super_()

        child = declare_class(Identifier("Child"), init=child_init, extends=parent)

        with self.assertRaises(UninitializedReceiverError):
            child.new()

    def test_three_levels(self) -> None:
        calls = []  # type: List[str]

        def grand_parent_init(this: Record) -> None:
            calls.append("grand parent")
            this.set("level", 0)

        def parent_init(this: ThisBinding, super_: Any) -> None:
            super_()
            calls.append("parent")
            this.set("level", this.get("level") + 1)

        def child_init(this: ThisBinding, super_: Any) -> None:
            super_()
            calls.append("child")
            this.set("level", this.get("level") + 1)

        grand_parent = declare_class(Identifier("Grand_parent"), init=grand_parent_init)
        parent = declare_class(
            Identifier("Parent"), init=parent_init, extends=grand_parent
        )
        child = declare_class(Identifier("Child"), init=child_init, extends=parent)

        record = child.new()

        self.assertListEqual(["grand parent", "parent", "child"], calls)
        self.assertEqual(2, record.get("level"))


if __name__ == "__main__":
    unittest.main()
