"""Tests for CacheKeyService (UID validation, hashing, key length bound)."""

import re
from dataclasses import dataclass

import pytest

from secrets_operator.application.services.cache_key_service import (
    CacheKeyService,
    KeyHashAlgorithm,
    TruncatedSHA256Algorithm,
    clone_client_cache_key,
    compute_client_cache_key,
    compute_client_cache_key_from_client,
    is_clone,
    validate_uid,
)
from secrets_operator.domain.entities import (
    AuthConfig,
    ClientHandle,
    ConnectionConfig,
    ObjectIdentity,
)
from secrets_operator.domain.enums import ErrorKind
from secrets_operator.domain.exceptions import (
    ClonedParentNotAllowedException,
    DuplicateUIDException,
    EmptyAuthMethodException,
    EmptyNamespaceException,
    IncompleteClientContextException,
    InvalidUIDLengthException,
    KeyLengthExceededException,
)
from secrets_operator.domain.value_objects import ClientCacheKey

AUTH_UID = "c4fad6b9-e7bb-4ed8-bc38-67fd6dc85a35"
CONN_UID = "c4fad6b9-e7bb-4ed8-bc38-67fd6dc85a36"
PROVIDER_UID = "c4fad6b9-e7bb-4ed8-bc38-67fd6dc85a37"

_KEY_RE = re.compile(r"^ical-[0-9a-f]{22}$")


@dataclass(frozen=True)
class _Provider:
    uid: str


def _auth(uid: str = AUTH_UID, generation: int = 0, method: str = "ical") -> AuthConfig:
    return AuthConfig(identity=ObjectIdentity(uid, generation), method=method)


def _conn(uid: str = CONN_UID, generation: int = 0) -> ConnectionConfig:
    return ConnectionConfig(identity=ObjectIdentity(uid, generation))


class TestValidateUID:
    def test_valid_uid_returned_unchanged(self) -> None:
        assert validate_uid(AUTH_UID) == AUTH_UID

    @pytest.mark.parametrize("uid", [AUTH_UID[:-1], AUTH_UID + "1", ""])
    def test_wrong_length_raises(self, uid: str) -> None:
        with pytest.raises(InvalidUIDLengthException) as exc_info:
            validate_uid(uid)
        assert exc_info.value.details["uid"] == uid
        assert exc_info.value.is_kind(ErrorKind.INVALID_UID_LENGTH)


class TestTruncatedSHA256Algorithm:
    def test_fixed_width_hex(self) -> None:
        digest = TruncatedSHA256Algorithm().hash("hello")
        assert len(digest) == 22
        assert digest == "2cf24dba5fb0a30e26e83b"


class TestComputeCacheKey:
    """Key is <method>-<22 hex>; deterministic and sensitive to every input."""

    def test_valid(self) -> None:
        key = CacheKeyService().compute_cache_key(_auth(), _conn(), PROVIDER_UID)
        assert _KEY_RE.match(key.value)
        assert not key.is_clone()

    def test_deterministic(self) -> None:
        svc = CacheKeyService()
        k1 = svc.compute_cache_key(_auth(), _conn(), PROVIDER_UID)
        k2 = CacheKeyService().compute_cache_key(_auth(), _conn(), PROVIDER_UID)
        assert k1 == k2

    def test_hash_matches_canonical_input(self) -> None:
        key = CacheKeyService().compute_cache_key(_auth(), _conn(), PROVIDER_UID)
        expected = TruncatedSHA256Algorithm().hash(
            f"{AUTH_UID}-0.{CONN_UID}-0.{PROVIDER_UID}"
        )
        assert key.value == f"ical-{expected}"

    @pytest.mark.parametrize(
        ("auth", "conn", "provider_uid"),
        [
            (_auth(generation=1), _conn(), PROVIDER_UID),
            (_auth(), _conn(generation=1), PROVIDER_UID),
            (_auth(uid="d4fad6b9-e7bb-4ed8-bc38-67fd6dc85a35"), _conn(), PROVIDER_UID),
            (_auth(), _conn(uid="d4fad6b9-e7bb-4ed8-bc38-67fd6dc85a36"), PROVIDER_UID),
            (_auth(), _conn(), "c4fad6b9-e7bb-4ed8-bc38-67fd6dc85a38"),
        ],
    )
    def test_any_input_change_changes_key(
        self, auth: AuthConfig, conn: ConnectionConfig, provider_uid: str
    ) -> None:
        svc = CacheKeyService()
        base = svc.compute_cache_key(_auth(), _conn(), PROVIDER_UID)
        assert svc.compute_cache_key(auth, conn, provider_uid) != base

    def test_method_at_max_length(self) -> None:
        method = "ical" + "x" * 36
        key = CacheKeyService().compute_cache_key(_auth(method=method), _conn(), PROVIDER_UID)
        assert key.value.startswith(method + "-")
        assert len(key.value) == 63

    def test_method_over_max_length_raises(self) -> None:
        with pytest.raises(KeyLengthExceededException) as exc_info:
            CacheKeyService().compute_cache_key(
                _auth(method="ical" + "x" * 37), _conn(), PROVIDER_UID
            )
        assert exc_info.value.details["max_method_length"] == 40
        assert exc_info.value.details["max_key_length"] == 63

    def test_duplicate_auth_and_connection_uid(self) -> None:
        with pytest.raises(DuplicateUIDException) as exc_info:
            CacheKeyService().compute_cache_key(_auth(), _conn(uid=AUTH_UID), PROVIDER_UID)
        assert exc_info.value.details["roles"] == ["auth", "connection"]
        assert exc_info.value.is_kind(ErrorKind.DUPLICATE_UID)

    def test_duplicate_provider_uid(self) -> None:
        with pytest.raises(DuplicateUIDException) as exc_info:
            CacheKeyService().compute_cache_key(_auth(), _conn(), CONN_UID)
        assert exc_info.value.details["roles"] == ["connection", "credential_provider"]

    def test_duplicate_checked_after_length(self) -> None:
        """An over-long auth UID is reported before the duplicate."""
        with pytest.raises(InvalidUIDLengthException):
            CacheKeyService().compute_cache_key(
                _auth(uid=AUTH_UID + "1"), _conn(uid=AUTH_UID), PROVIDER_UID
            )

    def test_uid_length_below(self) -> None:
        with pytest.raises(InvalidUIDLengthException):
            CacheKeyService().compute_cache_key(
                _auth(uid=AUTH_UID[:-1]), _conn(), PROVIDER_UID
            )

    def test_provider_uid_exempt_from_length_check(self) -> None:
        key = CacheKeyService().compute_cache_key(_auth(), _conn(), "sa-uid")
        assert _KEY_RE.match(key.value)

    def test_empty_method_raises(self) -> None:
        with pytest.raises(EmptyAuthMethodException):
            CacheKeyService().compute_cache_key(_auth(method=""), _conn(), PROVIDER_UID)

    def test_custom_algorithm(self) -> None:
        class Constant(KeyHashAlgorithm):
            def hash(self, data: str) -> str:
                return "0" * self.length

        key = CacheKeyService(Constant()).compute_cache_key(_auth(), _conn(), PROVIDER_UID)
        assert key == ClientCacheKey("ical-" + "0" * 22)


class TestComputeCacheKeyFromClient:
    def test_valid(self) -> None:
        handle = ClientHandle(
            auth=_auth(), connection=_conn(), credential_provider=_Provider(PROVIDER_UID)
        )
        assert compute_client_cache_key_from_client(handle) == compute_client_cache_key(
            _auth(), _conn(), PROVIDER_UID
        )

    def test_empty_handle_raises(self) -> None:
        with pytest.raises(IncompleteClientContextException) as exc_info:
            compute_client_cache_key_from_client(ClientHandle())
        assert exc_info.value.details["missing"] == ["auth", "connection", "credential_provider"]

    def test_provider_without_uid_raises(self) -> None:
        handle = ClientHandle(auth=_auth(), connection=_conn(), credential_provider=_Provider(""))
        with pytest.raises(IncompleteClientContextException) as exc_info:
            compute_client_cache_key_from_client(handle)
        assert exc_info.value.details["missing"] == ["credential_provider"]


class TestCloneHelpers:
    def test_clone_from_computed_key(self) -> None:
        root = compute_client_cache_key(_auth(), _conn(), PROVIDER_UID)
        clone = clone_client_cache_key(root, "ns1/ns2")
        assert clone.value == f"{root.value}-ns1/ns2"
        assert is_clone(clone)
        assert not is_clone(root)

    def test_clone_of_clone_raises(self) -> None:
        root = compute_client_cache_key(_auth(), _conn(), PROVIDER_UID)
        with pytest.raises(ClonedParentNotAllowedException):
            clone_client_cache_key(clone_client_cache_key(root, "ns1"), "ns3")

    def test_clone_empty_namespace_raises(self) -> None:
        with pytest.raises(EmptyNamespaceException):
            clone_client_cache_key("kubernetes-2a8108711ae49ac0faa724", "")

    def test_dashed_method_root_is_not_a_clone(self) -> None:
        root = compute_client_cache_key(_auth(method="app-role"), _conn(), PROVIDER_UID)
        assert not is_clone(root)
        assert clone_client_cache_key(root, "ns1").value == f"{root.value}-ns1"
