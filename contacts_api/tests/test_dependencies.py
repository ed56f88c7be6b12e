import unittest
from unittest.mock import patch

from contacts_api import dependencies
from contacts_api.config import Settings
from contacts_api.db import InMemoryDbClient, SqlDbClient
from contacts_api.storage import InMemoryStorageClient, S3StorageClient, StorageConfigError


def make_settings(**overrides) -> Settings:
    values = dict(
        db_url=None,
        oci_s3_endpoint=None,
        oci_s3_region=None,
        oci_s3_access_key=None,
        oci_s3_secret_key=None,
        oci_bucket_name=None,
        use_in_memory_backends=False,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class DependencyWiringTests(unittest.TestCase):
    def setUp(self):
        dependencies.reset_clients()
        self.addCleanup(dependencies.reset_clients)

    def _patch_settings(self, settings):
        patcher = patch("contacts_api.dependencies.get_settings", return_value=settings)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_db_falls_back_to_memory_without_url(self):
        self._patch_settings(make_settings())
        db = dependencies.get_db_client()
        self.assertIsInstance(db, InMemoryDbClient)
        self.assertIs(dependencies.get_db_client(), db)

    def test_db_log_names_the_reason_for_memory_store(self):
        self._patch_settings(
            make_settings(db_url="sqlite+pysqlite:///:memory:", use_in_memory_backends=True)
        )
        with self.assertLogs("contacts_api.dependencies", level="INFO") as logs:
            self.assertIsInstance(dependencies.get_db_client(), InMemoryDbClient)
        self.assertIn("USE_IN_MEMORY_BACKENDS", logs.output[0])
        self.assertNotIn("DB_URL not set", "\n".join(logs.output))

    def test_db_log_reports_missing_url(self):
        self._patch_settings(make_settings())
        with self.assertLogs("contacts_api.dependencies", level="WARNING") as logs:
            dependencies.get_db_client()
        self.assertIn("DB_URL not set", logs.output[0])

    def test_db_uses_sql_client_with_url(self):
        self._patch_settings(make_settings(db_url="sqlite+pysqlite:///:memory:"))
        self.assertIsInstance(dependencies.get_db_client(), SqlDbClient)

    def test_storage_disabled_when_unconfigured(self):
        self._patch_settings(make_settings())
        self.assertIsNone(dependencies.get_storage_client())

    def test_storage_in_memory_toggle(self):
        self._patch_settings(make_settings(use_in_memory_backends=True))
        self.assertIsInstance(dependencies.get_storage_client(), InMemoryStorageClient)

    def test_partial_storage_config_fails(self):
        self._patch_settings(make_settings(oci_bucket_name="avatars"))
        with self.assertRaises(StorageConfigError):
            dependencies.get_storage_client()

    def test_full_storage_config(self):
        self._patch_settings(
            make_settings(
                oci_s3_endpoint="https://objectstorage.example.test",
                oci_s3_region="eu-frankfurt-1",
                oci_s3_access_key="key",
                oci_s3_secret_key="secret",
                oci_bucket_name="avatars",
            )
        )
        storage = dependencies.get_storage_client()
        self.assertIsInstance(storage, S3StorageClient)
        self.assertEqual(storage.bucket, "avatars")


if __name__ == "__main__":
    unittest.main()
