"""
Integration tests for queries.py

Each test writes a small Go tree to a temporary directory and runs the
navigation queries against it.
"""

import os
import tempfile
import unittest
from pathlib import Path
from typing import Dict

from navigator.protocol import encode_result, implementations_result, package_result
from navigator.queries import (
    UsageError,
    analyze_package_interfaces,
    find_all_interfaces,
    find_file_implementations,
    find_file_interfaces,
    find_implementations,
    find_interfaces,
)

READER_FILE = """package files

type Reader interface {
\tRead() error
}

type File struct{}

func (f *File) Read() error {
\treturn nil
}
"""


class _GoTreeTestCase(unittest.TestCase):
    """Creates a temporary Go tree per test."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write_tree(self, files: Dict[str, str]) -> None:
        for rel, content in files.items():
            path = Path(self.root, rel)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

    def path(self, rel: str) -> str:
        return os.path.join(self.root, rel)


class TestFileInterfaces(_GoTreeTestCase):
    def test_one_entry_per_interface_method(self) -> None:
        self.write_tree({"io.go": """package io

type Reader interface {
\tRead(p []byte) (int, error)
}

type ReadWriter interface {
\tRead(p []byte) (int, error)
\tWrite(p []byte) (int, error)
}
"""})
        entries = find_file_interfaces(self.path("io.go"))
        self.assertEqual(
            [(e.interface_name, e.name) for e in entries],
            [("Reader", "Read"), ("ReadWriter", "Read"), ("ReadWriter", "Write")],
        )
        self.assertEqual([e.location.line for e in entries], [3, 7, 8])
        self.assertEqual([e.end_location.line for e in entries], [4, 8, 9])
        self.assertTrue(all(e.end_location.column == 0 for e in entries))
        self.assertTrue(all(e.location.file == self.path("io.go") for e in entries))

    def test_non_go_file_is_empty(self) -> None:
        self.write_tree({"README.md": "type Reader interface { Read() }"})
        self.assertEqual(find_file_interfaces(self.path("README.md")), [])

    def test_missing_file_is_empty(self) -> None:
        self.assertEqual(find_file_interfaces(self.path("missing.go")), [])


class TestFileImplementations(_GoTreeTestCase):
    def test_pointer_receiver_implementation(self) -> None:
        self.write_tree({"file.go": READER_FILE})
        implementations = find_file_implementations(self.path("file.go"))
        self.assertEqual(len(implementations), 1)
        impl = implementations[0]
        self.assertEqual((impl.method_name, impl.receiver_type_name), ("Read", "*File"))
        self.assertEqual((impl.start_location.line, impl.start_location.column), (8, 0))
        self.assertEqual((impl.end_location.line, impl.end_location.column), (10, 1))

    def test_all_methods_of_satisfying_type_are_returned(self) -> None:
        self.write_tree({
            "iface.go": "package p\n\ntype Runner interface {\n\tRun()\n}\n",
            "impl.go": (
                "package p\n\ntype Job struct{}\n\n"
                "func (j *Job) Run() {}\n\n"
                "func (j *Job) Describe() string { return \"job\" }\n\n"
                "type Idle struct{}\n\n"
                "func (i Idle) Wait() {}\n"
            ),
        })
        implementations = find_file_implementations(self.path("impl.go"))
        self.assertEqual(
            [(i.receiver_type_name, i.method_name) for i in implementations],
            [("*Job", "Run"), ("*Job", "Describe")],
        )

    def test_interfaces_found_in_subdirectories(self) -> None:
        self.write_tree({
            "impl.go": "package p\n\ntype T struct{}\n\nfunc (t T) Ping() {}\n",
            "contracts/pinger.go": "package contracts\n\ntype Pinger interface {\n\tPing()\n}\n",
        })
        implementations = find_file_implementations(self.path("impl.go"))
        self.assertEqual([i.method_name for i in implementations], ["Ping"])

    def test_method_set_is_limited_to_the_file(self) -> None:
        self.write_tree({
            "iface.go": "package p\n\ntype Service interface {\n\tStart()\n\tStop()\n}\n",
            "start.go": "package p\n\ntype Srv struct{}\n\nfunc (s *Srv) Start() {}\n",
            "stop.go": "package p\n\nfunc (s *Srv) Stop() {}\n",
        })
        self.assertEqual(find_file_implementations(self.path("start.go")), [])

    def test_empty_interfaces_do_not_match(self) -> None:
        self.write_tree({
            "any.go": "package p\n\ntype Any interface{}\n",
            "impl.go": "package p\n\ntype T struct{}\n\nfunc (t T) Anything() {}\n",
        })
        self.assertEqual(find_file_implementations(self.path("impl.go")), [])

    def test_test_file_interfaces_are_ignored(self) -> None:
        self.write_tree({
            "mock_test.go": "package p\n\ntype Pinger interface {\n\tPing()\n}\n",
            "impl.go": "package p\n\ntype T struct{}\n\nfunc (t T) Ping() {}\n",
        })
        self.assertEqual(find_file_implementations(self.path("impl.go")), [])

    def test_fixture_token_manager(self) -> None:
        fixture = Path(__file__).parent / "fixtures" / "tokens" / "token_manager.go"
        implementations = find_file_implementations(str(fixture))
        self.assertEqual(
            [(i.receiver_type_name, i.method_name) for i in implementations],
            [
                ("*SimpleTokenManager", "AddToken"),
                ("*SimpleTokenManager", "RemoveToken"),
                ("*SimpleTokenManager", "ValidateToken"),
            ],
        )
        self.assertEqual(
            [(i.start_location.line, i.end_location.line) for i in implementations],
            [(16, 23), (25, 29), (31, 33)],
        )


class TestTreeInterfaces(_GoTreeTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.write_tree({
            "a/closer.go": "package a\n\ntype Closer interface {\n\tClose() error\n}\n",
            "b/store.go": (
                "package b\n\ntype Store interface {\n\tOpen() error\n\tClose() error\n}\n"
            ),
            "vendor/dep/dep.go": "package dep\n\ntype Closer interface {\n\tClose() error\n}\n",
        })

    def test_all_matches_are_returned(self) -> None:
        entries = find_interfaces(self.root, "Close")
        self.assertEqual([e.interface_name for e in entries], ["Closer", "Store"])
        self.assertEqual(
            [e.location.file for e in entries],
            [self.path("a/closer.go"), self.path("b/store.go")],
        )
        self.assertEqual([(e.location.line, e.location.column) for e in entries], [(3, 1), (4, 1)])

    def test_unknown_method_is_empty(self) -> None:
        self.assertEqual(find_interfaces(self.root, "Flush"), [])

    def test_superset_of_file_interfaces(self) -> None:
        file_entries = [
            e for e in find_file_interfaces(self.path("b/store.go")) if e.name == "Close"
        ]
        tree_entries = find_interfaces(self.root, "Close")
        for entry in file_entries:
            self.assertIn(
                (entry.interface_name, entry.location),
                [(e.interface_name, e.location) for e in tree_entries],
            )

    def test_find_all_interfaces(self) -> None:
        entries = find_all_interfaces(self.root)
        self.assertEqual(
            [(e.interface_name, e.name) for e in entries],
            [("Closer", "Close"), ("Store", "Open"), ("Store", "Close")],
        )


class TestTreeImplementations(_GoTreeTestCase):
    def test_pointer_receiver_implementation(self) -> None:
        self.write_tree({"file.go": READER_FILE})
        implementations = find_implementations(self.root, "Read")
        self.assertEqual(
            [(i.receiver_type_name, i.method_name) for i in implementations],
            [("*File", "Read")],
        )
        self.assertEqual(implementations[0].start_location.line, 8)

    def test_no_interface_declares_method(self) -> None:
        self.write_tree({"file.go": READER_FILE})
        self.assertEqual(find_implementations(self.root, "Validate"), [])
        payload = implementations_result(find_implementations(self.root, "Validate"))
        self.assertEqual(encode_result(payload), '{"implementations":[]}')

    def test_types_aggregate_across_files(self) -> None:
        self.write_tree({
            "iface.go": "package p\n\ntype Service interface {\n\tStart()\n\tStop()\n}\n",
            "start.go": "package p\n\ntype Srv struct{}\n\nfunc (s *Srv) Start() {}\n",
            "stop.go": "package p\n\nfunc (s *Srv) Stop() {}\n",
        })
        implementations = find_implementations(self.root, "Stop")
        self.assertEqual(len(implementations), 1)
        self.assertEqual(implementations[0].receiver_type_name, "*Srv")
        self.assertEqual(implementations[0].file, self.path("stop.go"))

    def test_first_interface_declaring_method_wins(self) -> None:
        self.write_tree({
            "a.go": "package p\n\ntype Lifecycle interface {\n\tRun()\n\tStop()\n}\n",
            "b.go": "package p\n\ntype Runner interface {\n\tRun()\n}\n",
            "c.go": (
                "package p\n\ntype OnlyRun struct{}\n\nfunc (o OnlyRun) Run() {}\n\n"
                "type Full struct{}\n\nfunc (f Full) Run() {}\n\nfunc (f Full) Stop() {}\n"
            ),
        })
        implementations = find_implementations(self.root, "Run")
        self.assertEqual([i.receiver_type_name for i in implementations], ["Full"])

    def test_pointer_and_value_receivers_are_not_unified(self) -> None:
        self.write_tree({
            "iface.go": "package p\n\ntype Pair interface {\n\tLeft()\n\tRight()\n}\n",
            "impl.go": (
                "package p\n\ntype T struct{}\n\nfunc (t T) Left() {}\n\nfunc (t *T) Right() {}\n"
            ),
        })
        self.assertEqual(find_implementations(self.root, "Left"), [])

    def test_unreadable_file_is_skipped(self) -> None:
        self.write_tree({
            "iface.go": "package p\n\ntype Pinger interface {\n\tPing()\n}\n",
            "impl.go": "package p\n\ntype T struct{}\n\nfunc (t T) Ping() {}\n",
        })
        os.symlink(self.path("gone.go"), self.path("broken.go"))
        implementations = find_implementations(self.root, "Ping")
        self.assertEqual([i.receiver_type_name for i in implementations], ["T"])
        self.assertEqual([e.interface_name for e in find_interfaces(self.root, "Ping")], ["Pinger"])

    def test_unparsable_file_is_skipped(self) -> None:
        self.write_tree({
            "iface.go": "package p\n\ntype Pinger interface {\n\tPing()\n}\n",
            "impl.go": "package p\n\ntype T struct{}\n\nfunc (t T) Ping() {}\n",
            "broken.go": "package p\n\nfunc (t T) Ping( {\n",
        })
        implementations = find_implementations(self.root, "Ping")
        self.assertEqual([i.file for i in implementations], [self.path("impl.go")])

    def test_missing_root_is_empty(self) -> None:
        self.assertEqual(find_implementations(self.path("missing"), "Read"), [])

    def test_repeated_queries_are_identical(self) -> None:
        self.write_tree({"file.go": READER_FILE})
        first = encode_result(implementations_result(find_implementations(self.root, "Read")))
        second = encode_result(implementations_result(find_implementations(self.root, "Read")))
        self.assertEqual(first, second)


class TestPackageSummary(_GoTreeTestCase):
    def test_shared_method_name_marks_both_interfaces(self) -> None:
        self.write_tree({
            "closer.go": "package p\n\ntype Closer interface {\n\tClose() error\n}\n",
            "store.go": "package p\n\ntype Store interface {\n\tOpen() error\n\tClose() error\n}\n",
            "conn.go": (
                "package p\n\ntype Conn struct{}\n\nfunc (c *Conn) Close() error { return nil }\n"
            ),
        })
        record = analyze_package_interfaces(self.root)
        self.assertIn("Close", record.method_to_interface)
        self.assertEqual(record.method_to_interface["Close"], "Store")
        self.assertEqual(
            record.interface_implementations,
            {"Closer": ["Close"], "Store": ["Close"]},
        )

    def test_only_direct_files_contribute_candidates(self) -> None:
        self.write_tree({
            "iface.go": "package p\n\ntype Pinger interface {\n\tPing()\n}\n",
            "nested/impl.go": "package nested\n\ntype T struct{}\n\nfunc (t T) Ping() {}\n",
        })
        record = analyze_package_interfaces(self.root)
        self.assertEqual(record.interface_implementations, {})
        self.assertEqual(record.method_to_interface, {})

    def test_nested_interfaces_qualify_direct_types(self) -> None:
        self.write_tree({
            "impl.go": "package p\n\ntype T struct{}\n\nfunc (t T) Ping() {}\n",
            "nested/iface.go": "package nested\n\ntype Pinger interface {\n\tPing()\n}\n",
        })
        record = analyze_package_interfaces(self.root)
        # Pinger is not declared by a file of this package, so nothing is keyed by it.
        self.assertEqual(record.interface_implementations, {})

    def test_keys_are_sorted_on_the_wire(self) -> None:
        self.write_tree({
            "iface.go": (
                "package p\n\ntype Zeta interface {\n\tZ()\n}\n\n"
                "type Alpha interface {\n\tA()\n}\n"
            ),
            "impl.go": (
                "package p\n\ntype T struct{}\n\nfunc (t T) Z() {}\n\nfunc (t T) A() {}\n"
            ),
        })
        payload = package_result(analyze_package_interfaces(self.root))
        self.assertEqual(list(payload["interfaceImplementations"]), ["Alpha", "Zeta"])
        self.assertEqual(list(payload["methodToInterface"]), ["A", "Z"])

    def test_empty_directory(self) -> None:
        payload = package_result(analyze_package_interfaces(self.root))
        self.assertEqual(payload, {"interfaceImplementations": {}, "methodToInterface": {}})


class TestUsageErrors(unittest.TestCase):
    def test_empty_arguments_raise(self) -> None:
        with self.assertRaises(UsageError):
            find_implementations("", "Read")
        with self.assertRaises(UsageError):
            find_interfaces(".", "")
        with self.assertRaises(UsageError):
            find_file_interfaces("")
        with self.assertRaises(UsageError):
            analyze_package_interfaces(None)


if __name__ == "__main__":
    unittest.main()
