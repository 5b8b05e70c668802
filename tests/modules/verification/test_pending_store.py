from modules.verification.pending_store import EMAIL_KEY, NAME_KEY, PendingVerificationStore


class TestPendingVerificationStore:
    def test_empty_store(self, storage):
        assert PendingVerificationStore(storage).load() is None

    def test_save_and_load(self, storage):
        store = PendingVerificationStore(storage)
        store.save("ada@example.com", "Ada")

        pending = store.load()

        assert pending.email == "ada@example.com"
        assert pending.name == "Ada"
        assert storage.get_item(EMAIL_KEY) == "ada@example.com"
        assert storage.get_item(NAME_KEY) == "Ada"

    def test_save_without_name_drops_old_name(self, storage):
        store = PendingVerificationStore(storage)
        store.save("old@example.com", "Old")
        store.save("ada@example.com")

        assert store.load().name is None
        assert storage.get_item(NAME_KEY) is None

    def test_clear_removes_both_keys(self, storage):
        store = PendingVerificationStore(storage)
        store.save("ada@example.com", "Ada")
        storage.set_item("sessionCookies", {"sid": "1"})

        store.clear()

        assert store.load() is None
        assert storage.keys() == ["sessionCookies"]
