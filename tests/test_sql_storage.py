"""SqlStorage against an in-memory SQLite database."""

import unittest

from sqlalchemy import create_engine, delete, exc
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dossier import models
from dossier.core.errors import (
    AlreadyAcquiredError,
    CredentialIntegrityError,
    ValidationFailedError,
)
from dossier.services import credentials as svc
from dossier.storage import SqlStorage
from dossier.storage.seed import DOCUMENTS, load_world


class _SqlTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        models.Base.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine, autoflush=False)()
        self.storage = SqlStorage(self.session)
        self.user = self.storage.create_user("player", "hash")

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def credential(self, username: str, security: int = 0, medical: int = 0):
        return self.storage.create_credential(
            {
                "username": username,
                "password": "pw",
                "display_name": username,
                "security_level": security,
                "medical_level": medical,
            }
        )

    def selected_ids(self) -> list[int]:
        return [h.id for h in self.storage.get_user_credentials(self.user.id) if h.is_selected]


class TestSqlBindings(_SqlTestCase):
    def test_set_selected_is_exclusive(self) -> None:
        creds = [self.credential(name) for name in ("a", "b", "c")]
        for cred in creds:
            self.storage.add_credential_to_user(self.user.id, cred.id)
        for cred in (creds[1], creds[0], creds[2]):
            binding = self.storage.set_selected_credential(self.user.id, cred.id)
            self.assertTrue(binding.is_selected)
            self.assertEqual(self.selected_ids(), [cred.id])

    def test_add_selected_unselects_others(self) -> None:
        a, b = self.credential("a"), self.credential("b")
        self.storage.add_credential_to_user(self.user.id, a.id, is_selected=True)
        self.storage.add_credential_to_user(self.user.id, b.id, is_selected=True)
        self.assertEqual(self.selected_ids(), [b.id])

    def test_select_unheld_returns_none(self) -> None:
        a = self.credential("a")
        self.assertIsNone(self.storage.set_selected_credential(self.user.id, a.id))

    def test_duplicate_binding_rejected(self) -> None:
        a = self.credential("a")
        self.storage.add_credential_to_user(self.user.id, a.id, is_selected=True)
        with self.assertRaises(AlreadyAcquiredError):
            self.storage.add_credential_to_user(self.user.id, a.id, is_selected=True)
        held = self.storage.get_user_credentials(self.user.id)
        self.assertEqual(len(held), 1)
        self.assertTrue(held[0].is_selected)

    def test_missing_credential_is_not_reported_as_already_acquired(self) -> None:
        with self.engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA foreign_keys=ON")
        with self.assertRaises(exc.IntegrityError):
            self.storage.add_credential_to_user(self.user.id, 9999, is_selected=True)
        self.assertEqual(self.storage.get_user_credentials(self.user.id), [])

    def test_remove_binding(self) -> None:
        a = self.credential("a")
        self.storage.add_credential_to_user(self.user.id, a.id, is_selected=True)
        self.assertTrue(self.storage.remove_credential_from_user(self.user.id, a.id))
        self.assertFalse(self.storage.remove_credential_from_user(self.user.id, a.id))
        self.assertEqual(self.storage.get_user_credentials(self.user.id), [])

    def test_dangling_binding_raises_integrity_error(self) -> None:
        a = self.credential("a")
        self.storage.add_credential_to_user(self.user.id, a.id)
        # SQLite does not enforce foreign keys unless asked to.
        self.session.execute(delete(models.Credential).where(models.Credential.id == a.id))
        self.session.commit()
        with self.assertRaises(CredentialIntegrityError):
            self.storage.get_user_credentials(self.user.id)

    def test_engine_obsolescence(self) -> None:
        low = self.credential("low", security=1)
        self.credential("high", security=2)
        svc.verify_and_acquire(self.storage, self.user.id, "low", "pw")
        result = svc.verify_and_acquire(self.storage, self.user.id, "high", "pw")
        self.assertEqual(result.obsolete_credential.id, low.id)
        self.assertEqual(self.selected_ids(), [result.credential.id])


class TestSqlContent(_SqlTestCase):
    def test_create_credential_missing_display_name(self) -> None:
        with self.assertRaises(ValidationFailedError) as ctx:
            self.storage.create_credential({"username": "a", "password": "b"})
        self.assertIn("displayName", [e["loc"][0] for e in ctx.exception.errors])
        self.assertEqual(self.storage.list_credentials(), [])

    def test_seed_is_idempotent(self) -> None:
        first = load_world(self.storage)
        second = load_world(self.storage)
        self.assertEqual(first["documents"], len(DOCUMENTS))
        self.assertEqual(second, {"documents": 0, "terminals": 0, "personnel": 0, "credentials": 0})

    def test_accessible_documents_filter(self) -> None:
        load_world(self.storage)
        codes = [d.document_code for d in self.storage.get_accessible_documents(1, 0, 0)]
        self.assertEqual(codes, ["DOC-2301"])
        codes = [d.document_code for d in self.storage.get_accessible_documents(2, 2, 2)]
        self.assertEqual(codes, ["DOC-2301", "DOC-4382", "DOC-9173"])

    def test_document_json_columns_round_trip(self) -> None:
        load_world(self.storage)
        doc = next(d for d in self.storage.get_documents() if d.document_code == "DOC-4382")
        self.assertEqual(doc.images, ["neural_scan.jpg"])
        self.assertEqual(doc.related_documents, [1, 3])

    def test_ping(self) -> None:
        self.assertTrue(self.storage.ping())


if __name__ == "__main__":
    unittest.main()
