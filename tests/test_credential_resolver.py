import json
import threading
import time

import pytest

from artifact_locator.modules.artifact.credentials import (
    CredentialCache,
    CredentialResolver,
    DirectorySecretStore,
    InMemorySecretStore,
    LookupStatus,
    SecretLookup,
)
from artifact_locator.modules.artifact.domain import DeploymentContext
from artifact_locator.modules.artifact.util.exceptions import (
    CredentialDecryptionError,
    CredentialsNotFoundError,
)

NEXUS_ITEM = {"url": "http://nexus.local:8081", "repository": "releases", "username": "deploy", "password": "s3cret"}


def test_falls_back_to_wildcard_and_caches():
    store = InMemorySecretStore({("artifact", "_wildcard"): NEXUS_ITEM})
    resolver = CredentialResolver(store)
    ctx = DeploymentContext(environment="staging")

    creds = resolver.resolve("artifact", ctx)

    assert creds.repository == "releases"
    assert store.calls == [("artifact", "staging"), ("artifact", "_wildcard")]

    again = resolver.resolve("artifact", ctx)

    assert again is creds
    assert len(store.calls) == 2


def test_environment_item_wins_over_wildcard():
    store = InMemorySecretStore(
        {
            ("artifact", "production"): {**NEXUS_ITEM, "repository": "prod-releases"},
            ("artifact", "_wildcard"): NEXUS_ITEM,
        }
    )
    resolver = CredentialResolver(store)

    creds = resolver.resolve("artifact", DeploymentContext(environment="production"))

    assert creds.repository == "prod-releases"
    assert store.calls == [("artifact", "production")]


def test_legacy_nexus_item_is_last_resort():
    store = InMemorySecretStore({("artifact", "nexus"): NEXUS_ITEM})
    resolver = CredentialResolver(store)

    creds = resolver.resolve("artifact", DeploymentContext(environment="dev"))

    assert creds.url == "http://nexus.local:8081"
    assert [item for _, item in store.calls] == ["dev", "_wildcard", "nexus"]


def test_not_found_is_cached():
    store = InMemorySecretStore()
    resolver = CredentialResolver(store)
    ctx = DeploymentContext(environment="dev")

    with pytest.raises(CredentialsNotFoundError) as excinfo:
        resolver.resolve("artifact", ctx)
    assert excinfo.value.bag_name == "artifact"

    store.put("artifact", "_wildcard", NEXUS_ITEM)
    with pytest.raises(CredentialsNotFoundError):
        resolver.resolve("artifact", ctx)
    assert len(store.calls) == 3


def test_decryption_failure_stops_search_and_is_not_cached():
    store = InMemorySecretStore(
        {
            ("artifact", "staging"): None,
            ("artifact", "_wildcard"): NEXUS_ITEM,
        }
    )
    resolver = CredentialResolver(store)
    ctx = DeploymentContext(environment="staging")

    with pytest.raises(CredentialDecryptionError) as excinfo:
        resolver.resolve("artifact", ctx)

    assert excinfo.value.item_name == "staging"
    assert store.calls == [("artifact", "staging")]
    assert "artifact" not in resolver.cache

    store.put("artifact", "staging", {**NEXUS_ITEM, "repository": "staging-releases"})

    assert resolver.resolve("artifact", ctx).repository == "staging-releases"


def test_bags_are_cached_independently():
    store = InMemorySecretStore(
        {
            ("artifact", "_wildcard"): NEXUS_ITEM,
            ("other", "_wildcard"): {**NEXUS_ITEM, "repository": "thirdparty"},
        }
    )
    cache = CredentialCache()
    resolver = CredentialResolver(store, cache)
    ctx = DeploymentContext(environment="dev")

    assert resolver.resolve("artifact", ctx).repository == "releases"
    assert resolver.resolve("other", ctx).repository == "thirdparty"
    assert len(cache) == 2


def test_concurrent_resolution_hits_store_once():
    class SlowStore(InMemorySecretStore):
        def load(self, bag_name, item_name):
            time.sleep(0.05)
            return super().load(bag_name, item_name)

    store = SlowStore({("artifact", "_wildcard"): NEXUS_ITEM})
    resolver = CredentialResolver(store)
    ctx = DeploymentContext(environment="dev")
    results = []

    def worker():
        results.append(resolver.resolve("artifact", ctx))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert all(creds is results[0] for creds in results)
    assert store.calls == [("artifact", "dev"), ("artifact", "_wildcard")]


def test_concurrent_decryption_failure_is_shared_then_retried():
    class GatedStore(InMemorySecretStore):
        def __init__(self, items):
            super().__init__(items)
            self.release = threading.Event()

        def load(self, bag_name, item_name):
            self.release.wait(timeout=5)
            return super().load(bag_name, item_name)

    store = GatedStore({("artifact", "dev"): None, ("artifact", "_wildcard"): NEXUS_ITEM})
    resolver = CredentialResolver(store)
    ctx = DeploymentContext(environment="dev")
    errors = []

    def worker():
        try:
            resolver.resolve("artifact", ctx)
        except CredentialDecryptionError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    time.sleep(0.2)
    store.release.set()
    for thread in threads:
        thread.join()

    assert len(errors) == 4
    assert store.calls == [("artifact", "dev")]
    assert "artifact" not in resolver.cache

    with pytest.raises(CredentialDecryptionError):
        resolver.resolve("artifact", ctx)
    assert len(store.calls) == 2


def test_slow_bag_does_not_block_other_bags():
    entered = threading.Event()
    release = threading.Event()

    class BlockingStore(InMemorySecretStore):
        def load(self, bag_name, item_name):
            if bag_name == "a":
                entered.set()
                release.wait(timeout=5)
            return super().load(bag_name, item_name)

    store = BlockingStore(
        {
            ("a", "_wildcard"): NEXUS_ITEM,
            ("b", "_wildcard"): {**NEXUS_ITEM, "repository": "b-repo"},
        }
    )
    resolver = CredentialResolver(store)
    ctx = DeploymentContext(environment="dev")
    slow = threading.Thread(target=resolver.resolve, args=("a", ctx))
    slow.start()
    try:
        assert entered.wait(timeout=5)

        assert resolver.resolve("b", ctx).repository == "b-repo"
        assert slow.is_alive()
        assert "a" not in resolver.cache
    finally:
        release.set()
        slow.join()

    assert resolver.resolve("a", ctx).repository == "releases"


def test_solo_mode_reads_wildcard_directly():
    store = InMemorySecretStore({("artifact", "_wildcard"): NEXUS_ITEM})
    resolver = CredentialResolver(store, solo_mode=True)

    creds = resolver.resolve("artifact", DeploymentContext(environment="dev"))

    assert creds.repository == "releases"
    assert store.calls == [("artifact", "_wildcard")]


def test_credentials_repr_hides_password():
    store = InMemorySecretStore({("artifact", "_wildcard"): NEXUS_ITEM})
    creds = CredentialResolver(store).resolve("artifact", DeploymentContext(environment="dev"))

    assert "s3cret" not in repr(creds)
    assert creds.password == "s3cret"


def test_directory_store_reads_json_items(tmp_path):
    bag = tmp_path / "artifact"
    bag.mkdir()
    (bag / "_wildcard.json").write_text(json.dumps({"id": "_wildcard", **NEXUS_ITEM, "ssl_verify": "false"}))
    (bag / "broken.json").write_text("{not json")
    store = DirectorySecretStore(tmp_path)

    found = store.load("artifact", "_wildcard")
    assert found.status is LookupStatus.FOUND
    assert "id" not in found.data

    assert store.load("artifact", "missing").status is LookupStatus.NOT_FOUND
    assert store.load("artifact", "broken").status is LookupStatus.DECRYPTION_FAILED

    resolver = CredentialResolver(store)
    creds = resolver.resolve("artifact", DeploymentContext(environment="qa"))
    assert creds.ssl_verify is False


def test_secret_lookup_helpers():
    assert SecretLookup.not_found().status is LookupStatus.NOT_FOUND
    assert SecretLookup.decryption_failed("bad key").reason == "bad key"
