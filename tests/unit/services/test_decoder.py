# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Covers decoding into typed values and the diagnostics produced on failure."""

import copy
import json
from dataclasses import dataclass
from typing import Union
from unittest import TestCase

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from pathjson.services.decoding.decoder import decode, syntax_diagnostic
from pathjson.services.exceptions import DecodeError


class Person(BaseModel):
    name: str
    age: NonNegativeInt


class Address(BaseModel):
    street: str
    zip: str


class Profile(BaseModel):
    bio: str
    score: float
    active: bool


class User(BaseModel):
    name: str
    age: NonNegativeInt
    tags: list[str]
    addresses: list[Address]
    profile: Profile


class Strictly(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str


class Either(BaseModel):
    value: Union[int, str]


@dataclass
class Point:
    x: int
    y: int


USER_DOC = {
    "name": "Ada",
    "age": 36,
    "tags": ["math", "engines"],
    "addresses": [
        {"street": "1 Main St", "zip": "10001"},
        {"street": "2 Side St", "zip": "10002"},
        {"street": "3 Back St", "zip": "10003"},
    ],
    "profile": {"bio": "Analyst", "score": 9.5, "active": True},
}


def _encode(doc) -> bytes:
    return json.dumps(doc).encode("utf-8")


def _failure(data: bytes, shape, **kwargs) -> DecodeError:
    try:
        decode(data, shape, **kwargs)
    except DecodeError as exc:
        return exc
    raise AssertionError("decode unexpectedly succeeded")


class DecodeSuccessTest(TestCase):
    def test_simple_shape(self):
        value = decode(b'{"name":"Test","age":20}', Person)
        self.assertEqual(value, Person(name="Test", age=20))

    def test_nested_document_round_trips(self):
        value = decode(_encode(USER_DOC), User)
        self.assertIsInstance(value, User)
        self.assertEqual(value.model_dump(), USER_DOC)
        self.assertEqual(value.addresses[2].zip, "10003")

    def test_non_model_shapes(self):
        self.assertEqual(decode(b"[1, 2, 3]", list[int]), [1, 2, 3])
        self.assertEqual(decode(b'{"a": 1}', dict[str, int]), {"a": 1})
        self.assertEqual(decode(b'{"x": 1, "y": 2}', Point), Point(1, 2))

    def test_each_decode_builds_a_fresh_value(self):
        data = _encode(USER_DOC)
        first = decode(data, User)
        second = decode(data, User)
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def test_lax_mode_coerces(self):
        value = decode(b'{"name":"Test","age":"20"}', Person, strict=False)
        self.assertEqual(value.age, 20)


class DecodeDataFailureTest(TestCase):
    def test_invalid_age_reports_field(self):
        exc = _failure(b'{"name":"Test","age":"invalid"}', Person)
        diag = exc.diagnostic
        self.assertEqual(str(diag.path), "age")
        self.assertEqual(diag.kind, "data")
        self.assertIn("integer", diag.cause)
        self.assertIn('string "invalid"', diag.cause)

    def test_negative_age_is_rejected(self):
        exc = _failure(b'{"name":"Test","age":-1}', Person)
        self.assertEqual(str(exc.diagnostic.path), "age")
        self.assertIn("greater than or equal to 0", exc.diagnostic.cause)

    def test_strict_mode_rejects_numeric_strings(self):
        exc = _failure(b'{"name":"Test","age":"20"}', Person)
        self.assertEqual(str(exc.diagnostic.path), "age")

    def test_single_leaf_mismatch_is_located_exactly(self):
        cases = [
            (("name",), 5, "name"),
            (("tags", 1), 7, "tags[1]"),
            (("addresses", 2, "zip"), 12345, "addresses[2].zip"),
            (("addresses", 0, "street"), None, "addresses[0].street"),
            (("profile", "active"), "yes", "profile.active"),
            (("profile", "score"), "high", "profile.score"),
        ]
        for location, bad_value, expected in cases:
            with self.subTest(path=expected):
                doc = copy.deepcopy(USER_DOC)
                node = doc
                for segment in location[:-1]:
                    node = node[segment]
                node[location[-1]] = bad_value

                exc = _failure(_encode(doc), User)
                self.assertEqual(len(exc.diagnostics), 1)
                self.assertEqual(str(exc.diagnostic.path), expected)
                self.assertEqual(exc.diagnostic.kind, "data")

    def test_wrong_type_cause_names_both_sides(self):
        doc = copy.deepcopy(USER_DOC)
        doc["addresses"][2]["zip"] = 12345
        exc = _failure(_encode(doc), User)
        self.assertIn("valid string", exc.diagnostic.cause)
        self.assertIn("number 12345", exc.diagnostic.cause)

    def test_missing_required_field(self):
        exc = _failure(b'{"name":"Test"}', Person)
        self.assertEqual(str(exc.diagnostic.path), "age")
        self.assertEqual(exc.diagnostic.cause, "Field required")

        doc = copy.deepcopy(USER_DOC)
        del doc["addresses"][1]["zip"]
        exc = _failure(_encode(doc), User)
        self.assertEqual(str(exc.diagnostic.path), "addresses[1].zip")

    def test_root_kind_mismatch_has_empty_path(self):
        for body in (b"[1, 2]", b'"hello"', b"42", b"null"):
            with self.subTest(body=body):
                exc = _failure(body, Person)
                self.assertTrue(exc.diagnostic.path.is_root)
                self.assertEqual(str(exc.diagnostic.path), "")
                self.assertEqual(exc.diagnostic.kind, "data")

    def test_collection_shapes(self):
        exc = _failure(b'[1, 2, "x"]', list[int])
        self.assertEqual(str(exc.diagnostic.path), "[2]")

        exc = _failure(b'{"a": 1, "b": "x"}', dict[str, int])
        self.assertEqual(str(exc.diagnostic.path), "b")

        exc = _failure(b'{"a.b": "x"}', dict[str, int])
        self.assertEqual(str(exc.diagnostic.path), '["a.b"]')

        exc = _failure(b'{"x": 1, "y": "2"}', Point)
        self.assertEqual(str(exc.diagnostic.path), "y")

    def test_union_member_tags_are_not_part_of_the_path(self):
        exc = _failure(b'{"value": []}', Either)
        self.assertGreaterEqual(len(exc.diagnostics), 2)
        for diag in exc.diagnostics:
            self.assertEqual(str(diag.path), "value")

    def test_unknown_field_when_forbidden(self):
        exc = _failure(b'{"name": "a", "nick": "b"}', Strictly)
        self.assertEqual(str(exc.diagnostic.path), "nick")

    def test_every_failure_is_collected(self):
        exc = _failure(b'{"name": 5, "age": "x"}', Person)
        self.assertEqual([str(d.path) for d in exc.diagnostics], ["name", "age"])
        self.assertIs(exc.diagnostic, exc.diagnostics[0])


class DecodeSyntaxFailureTest(TestCase):
    def test_truncated_document(self):
        exc = _failure(b'{"name": "Test", "age": ', Person)
        self.assertEqual(exc.diagnostic.kind, "syntax")
        self.assertEqual(str(exc.diagnostic.path), "age")
        self.assertTrue(exc.diagnostic.cause.startswith("Expecting value"))
        self.assertNotIn("Input should be", exc.diagnostic.cause)

    def test_unbalanced_braces(self):
        exc = _failure(b'{"name": "Test", "age": 20', Person)
        self.assertEqual(exc.diagnostic.kind, "syntax")
        self.assertEqual(str(exc.diagnostic.path), "")
        self.assertIn("delimiter", exc.diagnostic.cause)
        self.assertIn("line 1", exc.diagnostic.cause)

    def test_syntax_error_inside_nested_array(self):
        exc = _failure(b'{"addresses": [{}, {"zip": }]}', User)
        self.assertEqual(exc.diagnostic.kind, "syntax")
        self.assertEqual(str(exc.diagnostic.path), "addresses[1].zip")

    def test_empty_body_is_a_syntax_failure(self):
        for body in (b"", b"   "):
            with self.subTest(body=body):
                exc = _failure(body, Person)
                self.assertEqual(exc.diagnostic.kind, "syntax")
                self.assertTrue(exc.diagnostic.path.is_root)
                self.assertEqual(len(exc.diagnostics), 1)

    def test_nesting_deeper_than_the_interpreter_allows(self):
        exc = _failure(b"[" * 5000 + b"]" * 5000, Person)
        self.assertEqual(exc.diagnostic.kind, "syntax")
        self.assertTrue(exc.diagnostic.path.is_root)
        self.assertTrue(exc.diagnostic.cause)

        exc = _failure(b"[" * 5000, Person)
        self.assertEqual(exc.diagnostic.kind, "syntax")
        self.assertEqual(len(exc.diagnostics), 1)

    def test_nesting_the_validator_refuses_but_stdlib_accepts(self):
        body = b"[" * 300 + b"]" * 300
        json.loads(body)
        exc = _failure(body, Person)
        self.assertEqual(exc.diagnostic.kind, "syntax")
        self.assertTrue(exc.diagnostic.path.is_root)
        self.assertTrue(exc.diagnostic.cause)

    def test_invalid_utf8(self):
        diag = syntax_diagnostic(b'{"a": "\xff"}')
        self.assertEqual(diag.kind, "syntax")
        self.assertTrue(diag.path.is_root)
        self.assertEqual(diag.cause, "invalid UTF-8 at byte 7")

    def test_fallback_when_stdlib_parser_accepts(self):
        diag = syntax_diagnostic(b'{"a": NaN}', fallback="not allowed")
        self.assertEqual(diag.cause, "not allowed")
        self.assertTrue(diag.path.is_root)


class DecodeIdempotenceTest(TestCase):
    def test_same_diagnostic_twice(self):
        for body in (b'{"name":"Test","age":"invalid"}', b'{"name": '):
            with self.subTest(body=body):
                first = _failure(body, Person)
                second = _failure(body, Person)
                self.assertEqual(first.diagnostics, second.diagnostics)
                self.assertEqual(str(first.diagnostic.path), str(second.diagnostic.path))
                self.assertEqual(first.diagnostic.cause, second.diagnostic.cause)

    def test_decode_error_requires_a_diagnostic(self):
        with self.assertRaises(ValueError):
            DecodeError(())
