# pylint: disable=missing-docstring

import io
import os
import pathlib
import sys
import unittest
import unittest.mock
from typing import Tuple

import inheritance_idioms
from inheritance_idioms import idioms, main
from inheritance_idioms.idioms import Strategy
from inheritance_idioms.objects import MethodNotFoundError, Record


class Test_against_recorded(unittest.TestCase):
    # Set this variable to True if you want to re-record the test data,
    # without any checks
    RERECORD = False

    def test_all_strategies(self) -> None:
        repo_dir = pathlib.Path(os.path.realpath(__file__)).parent.parent

        case_dir = repo_dir / "test_data" / "main" / "all_strategies"
        assert case_dir.exists() and case_dir.is_dir(), case_dir

        params = main.Parameters(strategies=list(Strategy), explain=False)

        stdout = io.StringIO()
        stderr = io.StringIO()

        return_code = main.execute(params=params, stdout=stdout, stderr=stderr)

        self.assertEqual("", stderr.getvalue(), "Expected no stderr")
        self.assertEqual(0, return_code, "Expected 0 return code")

        stdout_pth = case_dir / "stdout.txt"
        if Test_against_recorded.RERECORD:
            stdout_pth.write_text(stdout.getvalue(), encoding="utf-8")
        else:
            self.assertEqual(
                stdout_pth.read_text(encoding="utf-8"), stdout.getvalue(), stdout_pth
            )


class Test_execute(unittest.TestCase):
    def test_single_strategy(self) -> None:
        params = main.Parameters(strategies=[Strategy.FUNCTIONAL], explain=False)

        stdout = io.StringIO()
        stderr = io.StringIO()

        return_code = main.execute(params=params, stdout=stdout, stderr=stderr)

        self.assertEqual(0, return_code)
        self.assertEqual("", stderr.getvalue())
        self.assertEqual(
            "functional say: child_4_1\n"
            "functional say: child_4_2\n"
            "functional say shared: False\n",
            stdout.getvalue(),
        )

    def test_combination_setup_only_when_selected(self) -> None:
        params = main.Parameters(
            strategies=[Strategy.PARASITIC_COMBINATION], explain=False
        )

        stdout = io.StringIO()
        main.execute(params=params, stdout=stdout, stderr=io.StringIO())

        self.assertNotIn("Parent_3", stdout.getvalue())
        self.assertEqual(2, stdout.getvalue().count("Parent_6 constructor called"))

    def test_explain_writes_tradeoffs_before_trace(self) -> None:
        params = main.Parameters(strategies=[Strategy.COMBINATION], explain=True)

        stdout = io.StringIO()
        return_code = main.execute(params=params, stdout=stdout, stderr=io.StringIO())

        self.assertEqual(0, return_code)

        text = stdout.getvalue()
        self.assertTrue(text.startswith("== Combination ==\nAdvantages: "), text)
        self.assertIn("\nDisadvantages: ", text)
        self.assertIn("\nSuitable for: ", text)
        self.assertLess(
            text.index("Suitable for: "),
            text.index("combination: Parent_3 constructor called"),
        )

    def test_explain_without_suitable_for(self) -> None:
        params = main.Parameters(strategies=[Strategy.MIXIN], explain=True)

        stdout = io.StringIO()
        main.execute(params=params, stdout=stdout, stderr=io.StringIO())

        self.assertTrue(stdout.getvalue().startswith("== Mixin ==\n"))
        self.assertNotIn("Suitable for: ", stdout.getvalue())


class Test_execute_failure(unittest.TestCase):
    def test_object_model_error_is_reported(self) -> None:
        def raise_method_not_found(
            this: idioms.Idiom,  # pylint: disable=unused-argument
        ) -> None:
            raise MethodNotFoundError(name="say", record=Record(label="child_3_1"))

        params = main.Parameters(
            strategies=[Strategy.FUNCTIONAL, Strategy.COMBINATION], explain=False
        )

        stdout = io.StringIO()
        stderr = io.StringIO()

        with unittest.mock.patch.object(
            idioms.Combination, "demonstrate", raise_method_not_found
        ):
            return_code = main.execute(params=params, stdout=stdout, stderr=stderr)

        self.assertEqual(1, return_code)
        self.assertEqual(
            "Failed to demonstrate the strategy 3:\n"
            "* child_3_1.say is not a method\n",
            stderr.getvalue(),
        )
        self.assertTrue(stdout.getvalue().startswith("functional say: child_4_1\n"))


class Test_main(unittest.TestCase):
    def run_main(self, *arguments: str) -> Tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()

        with unittest.mock.patch.object(
            sys, "argv", ["inheritance-idioms"] + list(arguments)
        ), unittest.mock.patch.object(
            sys, "stdout", stdout
        ), unittest.mock.patch.object(
            sys, "stderr", stderr
        ):
            return_code = main.main(prog="inheritance-idioms")

        return return_code, stdout.getvalue(), stderr.getvalue()

    def test_unexpected_strategy(self) -> None:
        return_code, stdout, stderr = self.run_main("--strategy", "1", "nope")

        self.assertEqual(1, return_code)
        self.assertEqual("", stdout)
        self.assertEqual(
            "Failed to parse the --strategy:\n* Unexpected strategy: nope\n", stderr
        )

    def test_repeated_strategy_demonstrated_once(self) -> None:
        return_code, stdout, stderr = self.run_main(
            "--strategy", "3", "combination"
        )

        self.assertEqual(0, return_code)
        self.assertEqual("", stderr)
        self.assertEqual(1, stdout.count("combination parent constructor calls: 3\n"))
        self.assertEqual(3, stdout.count("combination: Parent_3 constructor called\n"))
        self.assertNotIn("\n\n", stdout)

    def test_list(self) -> None:
        return_code, stdout, stderr = self.run_main("--list")

        self.assertEqual(0, return_code)
        self.assertEqual("", stderr)
        self.assertEqual(len(Strategy), len(stdout.splitlines()))
        self.assertIn("6 parasitic_combination: Parasitic combination\n", stdout)

    def test_version(self) -> None:
        return_code, stdout, stderr = self.run_main("--version")

        self.assertEqual(0, return_code)
        self.assertEqual("", stderr)
        self.assertEqual(f"{inheritance_idioms.__version__}\n", stdout)

    def test_all_strategies_by_default(self) -> None:
        return_code, stdout, stderr = self.run_main()

        self.assertEqual(0, return_code)
        self.assertEqual("", stderr)
        self.assertTrue(stdout.startswith("prototype chain say: 40\n"), stdout)
        self.assertTrue(stdout.endswith("  walk=...)\n"), stdout)


class Test_parse_strategy(unittest.TestCase):
    def test_by_number(self) -> None:
        self.assertIs(Strategy.PARASITIC, main.parse_strategy("5"))

    def test_by_name(self) -> None:
        self.assertIs(
            Strategy.PARASITIC_COMBINATION,
            main.parse_strategy("parasitic-combination"),
        )
        self.assertIs(Strategy.MIXIN, main.parse_strategy("mixin"))

    def test_unknown(self) -> None:
        with self.assertRaises(ValueError):
            main.parse_strategy("9")

        with self.assertRaises(ValueError):
            main.parse_strategy("multiple_inheritance")


class Test_write_error_report(unittest.TestCase):
    def test_bullets(self) -> None:
        stderr = io.StringIO()

        main.write_error_report(
            message="Failed to parse the --strategy",
            errors=["Unexpected strategy: x", "Unexpected strategy: y"],
            stderr=stderr,
        )

        self.assertEqual(
            "Failed to parse the --strategy:\n"
            "* Unexpected strategy: x\n"
            "* Unexpected strategy: y\n",
            stderr.getvalue(),
        )


class Test_list_strategies(unittest.TestCase):
    def test_all_listed(self) -> None:
        stdout = io.StringIO()

        main.list_strategies(stdout=stdout)

        lines = stdout.getvalue().splitlines()
        self.assertEqual(len(Strategy), len(lines))
        self.assertEqual("1 prototype_chain: Prototype chain", lines[0])
        self.assertEqual("8 mixin: Mixin", lines[-1])


if __name__ == "__main__":
    unittest.main()
