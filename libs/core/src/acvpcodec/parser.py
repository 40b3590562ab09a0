"""Vector set / test group / test case containers.

The three containers are written once and parameterised by the family codec
class (:class:`~acvpcodec.blkcipher.BlockCipher`,
:class:`~acvpcodec.hash.SecureHash`, :class:`~acvpcodec.drbg.Drbg` or
:class:`~acvpcodec.msgauth.MsgAuth`). Decoding runs top-down and fails fast:
one bad test case invalidates its group, which invalidates the request.
Results flow bottom-up into the two-element response document.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Generic, Iterator, List, Mapping, Tuple, Type, TypeVar

from .algorithms import AlgorithmFamily, classify
from .context import GroupContext, TestType, build_group_context
from .errors import MalformedDocument, MissingRequiredField, WrongFieldType
from .interfaces import AcvpTestCase, RandomSource
from .registry import codecs
from .util import (
    JsonDocument,
    dump_json,
    get_acvp_bool,
    get_acvp_str,
    get_acvp_u32,
    get_algorithm_type,
    load_json,
    pretty_json,
)

# Trigger codec registration side-effects
from . import blkcipher as _blkcipher  # noqa: F401
from . import drbg as _drbg  # noqa: F401
from . import hash as _hash  # noqa: F401
from . import msgauth as _msgauth  # noqa: F401

log = logging.getLogger(__name__)

T = TypeVar("T", bound=AcvpTestCase)


def _as_object(value: Any, what: str) -> Mapping[str, Any]:
    value = load_json(value, what)
    if not isinstance(value, Mapping):
        raise MalformedDocument(f"Failed to parse {what} JSON: expected an object")
    return value


def _as_list(key: str, obj: Mapping[str, Any]) -> List[Any]:
    if key not in obj:
        raise MissingRequiredField(key, f"Required key '{key}' is missing")
    value = obj[key]
    if not isinstance(value, list):
        raise WrongFieldType(key, f"Value associated with key '{key}' is not an array")
    return value


class AcvpTest(Generic[T]):
    """One test case: the decoded codec instance plus the raw test JSON."""

    def __init__(
        self,
        test: Mapping[str, Any] | str,
        ctx: GroupContext,
        codec: Type[T],
        *,
        random_bytes: RandomSource = os.urandom,
    ) -> None:
        tc = _as_object(test, "testcase")
        if "tcId" not in tc:
            raise MissingRequiredField("tcId", "Required field tcId missing from testcase JSON")
        self.tcid = get_acvp_u32("tcId", tc)
        self.ctx = ctx
        self.test: T = codec.decode(tc, ctx, random_bytes=random_bytes)
        self._test_json = tc

    def set_result(self, result: Any) -> None:
        self.test.set_result(result)

    @property
    def has_result(self) -> bool:
        return self.test.has_result

    def get_result(self) -> Dict[str, Any]:
        return self.test.get_result()

    def dump_result(self) -> str:
        return self.test.dump_result()

    def pretty_result(self, indent: int | None = None) -> str:
        return self.test.pretty_result(indent)

    def get_test_data(self) -> T:
        return self.test

    def dump(self) -> str:
        return dump_json(self._test_json)

    def pretty(self, indent: int | None = None) -> str:
        return pretty_json(self._test_json, indent)


class AcvpTestGroup(Generic[T]):
    def __init__(
        self,
        algorithm: str,
        tgjson: Mapping[str, Any] | str,
        codec: Type[T],
        *,
        random_bytes: RandomSource = os.urandom,
    ) -> None:
        tg = _as_object(tgjson, "testgroup")
        if "tgId" not in tg or "testType" not in tg:
            missing = "tgId" if "tgId" not in tg else "testType"
            raise MissingRequiredField(missing, "Provided testgroup JSON does not have required fields")

        self.context = build_group_context(tg, algorithm)
        tcs = _as_list("tests", tg) if tg.get("tests") is not None else []
        self.tests: List[AcvpTest[T]] = [
            AcvpTest(tc, self.context, codec, random_bytes=random_bytes) for tc in tcs
        ]
        self._testgroup_json = tg
        log.debug("tgId %d: decoded %d %s tests", self.tgid, len(self.tests), self.test_type.value)

    @property
    def tgid(self) -> int:
        return self.context.tgid

    @property
    def test_type(self) -> TestType:
        return self.context.test_type

    def __iter__(self) -> Iterator[AcvpTest[T]]:
        return iter(self.tests)

    def __len__(self) -> int:
        return len(self.tests)

    def get_result(self) -> Dict[str, Any]:
        return {
            "tgId": self.tgid,
            "tests": [test.get_result() for test in self.tests],
        }

    def dump_result(self) -> str:
        return dump_json(self.get_result())

    def pretty_result(self, indent: int | None = None) -> str:
        return pretty_json(self.get_result(), indent)

    def dump(self) -> str:
        return dump_json(self._testgroup_json)

    def pretty(self, indent: int | None = None) -> str:
        return pretty_json(self._testgroup_json, indent)


class AcvpRequest(Generic[T]):
    """A whole vector set.

    The document must hold at most one `acvVersion` entry and exactly one
    vector-set entry; a second vector-set entry is rejected instead of being
    merged under the last entry's metadata.
    """

    def __init__(
        self,
        document: JsonDocument,
        codec: Type[T],
        *,
        random_bytes: RandomSource = os.urandom,
    ) -> None:
        request = load_json(document, "ACVP Request")
        if not isinstance(request, list):
            raise MalformedDocument("ACVP Request vector must be a JSON Array")

        self.version = ""
        self.testgroups: List[AcvpTestGroup[T]] = []
        vector_set = None
        for entry in request:
            if not isinstance(entry, Mapping):
                raise MalformedDocument("ACVP Request entries must be JSON objects")
            if "acvVersion" in entry:
                self.version = get_acvp_str("acvVersion", entry)
                continue
            if vector_set is not None:
                raise MalformedDocument("ACVP Request holds more than one vector set")
            vector_set = entry

        if vector_set is None:
            raise MissingRequiredField("algorithm", "No 'algorithm' key present in input vector")

        self.algorithm = get_acvp_str("algorithm", vector_set)
        self.alg_type: AlgorithmFamily = classify(self.algorithm)
        if self.alg_type is not codec.family:
            raise MalformedDocument(
                f"Algorithm '{self.algorithm}' is a {self.alg_type.value} algorithm, "
                f"{codec.__name__} decodes {codec.family.value}"
            )
        self.revision = get_acvp_str("revision", vector_set)
        self.vsid = get_acvp_u32("vsId", vector_set)
        self.is_sample = get_acvp_bool("isSample", vector_set)
        for tg in _as_list("testGroups", vector_set):
            self.testgroups.append(AcvpTestGroup(self.algorithm, tg, codec, random_bytes=random_bytes))
        self._request_json = request
        log.debug(
            "vsId %d: decoded %s with %d test groups", self.vsid, self.algorithm, len(self.testgroups)
        )

    def iter_tests(self) -> Iterator[Tuple[AcvpTestGroup[T], AcvpTest[T]]]:
        for group in self.testgroups:
            for test in group:
                yield group, test

    def get_result(self) -> List[Dict[str, Any]]:
        return [
            {"acvVersion": self.version},
            {
                "vsId": self.vsid,
                "algorithm": self.algorithm,
                "revision": self.revision,
                "isSample": self.is_sample,
                "testGroups": [tg.get_result() for tg in self.testgroups],
            },
        ]

    def dump_result(self) -> str:
        return dump_json(self.get_result())

    def pretty_result(self, indent: int | None = None) -> str:
        return pretty_json(self.get_result(), indent)

    def dump(self) -> str:
        return dump_json(self._request_json)

    def pretty(self, indent: int | None = None) -> str:
        return pretty_json(self._request_json, indent)


def parse_request(document: JsonDocument, *, random_bytes: RandomSource = os.urandom) -> AcvpRequest[Any]:
    """Build a request with the codec registered for the document's algorithm."""
    request = load_json(document, "ACVP Request")
    codec = codecs.get(get_algorithm_type(request))
    return AcvpRequest(request, codec, random_bytes=random_bytes)


__all__ = ["AcvpTest", "AcvpTestGroup", "AcvpRequest", "parse_request"]
