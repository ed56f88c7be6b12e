import io
import unittest

from botocore.exceptions import ClientError
from botocore.response import StreamingBody
from botocore.stub import Stubber

from contacts_api.storage import (
    InMemoryStorageClient,
    S3StorageClient,
    StorageConfigError,
    StorageObjectNotFoundError,
)

S3_SETTINGS = dict(
    bucket="avatars",
    region="eu-frankfurt-1",
    endpoint="https://namespace.compat.objectstorage.eu-frankfurt-1.oraclecloud.com",
    access_key_id="key",
    secret_access_key="secret",
)


class InMemoryStorageClientTests(unittest.TestCase):
    def test_upload_download_and_stream(self):
        storage = InMemoryStorageClient()
        storage.upload("1", b"abc", "image/jpeg")
        self.assertEqual(storage.download("1"), b"abc")

        stream = storage.get_stream("1")
        try:
            self.assertEqual(stream.content_type, "image/jpeg")
            self.assertEqual(stream.content_length, 3)
            self.assertEqual(b"".join(stream.iter_chunks(chunk_size=2)), b"abc")
        finally:
            stream.close()

    def test_default_content_type_and_overwrite(self):
        storage = InMemoryStorageClient()
        storage.upload("1", b"old")
        storage.upload("1", b"new")
        stream = storage.get_stream("1")
        self.assertEqual(stream.content_type, "application/octet-stream")
        self.assertEqual(storage.download("1"), b"new")

    def test_missing_key(self):
        storage = InMemoryStorageClient()
        with self.assertRaises(StorageObjectNotFoundError):
            storage.download("missing")
        with self.assertRaises(StorageObjectNotFoundError):
            storage.get_stream("missing")


class S3StorageClientTests(unittest.TestCase):
    def setUp(self):
        self.storage = S3StorageClient(**S3_SETTINGS)
        self.stubber = Stubber(self.storage._client)
        self.stubber.activate()

    def tearDown(self):
        self.stubber.deactivate()

    def test_requires_every_setting(self):
        for name in S3_SETTINGS:
            with self.subTest(missing=name):
                settings = dict(S3_SETTINGS, **{name: ""})
                with self.assertRaises(StorageConfigError) as ctx:
                    S3StorageClient(**settings)
                self.assertIn(name, str(ctx.exception))

    def test_upload_defaults_content_type(self):
        self.stubber.add_response(
            "put_object",
            {},
            {
                "Bucket": "avatars",
                "Key": "1",
                "Body": b"data",
                "ContentType": "application/octet-stream",
            },
        )
        self.storage.upload("1", b"data")
        self.stubber.assert_no_pending_responses()

    def test_download(self):
        self.stubber.add_response(
            "get_object",
            {"Body": StreamingBody(io.BytesIO(b"data"), 4)},
            {"Bucket": "avatars", "Key": "1"},
        )
        self.assertEqual(self.storage.download("1"), b"data")

    def test_get_stream_exposes_metadata(self):
        self.stubber.add_response(
            "get_object",
            {
                "Body": StreamingBody(io.BytesIO(b"image"), 5),
                "ContentType": "image/png",
                "ContentLength": 5,
            },
            {"Bucket": "avatars", "Key": "1"},
        )
        stream = self.storage.get_stream("1")
        try:
            self.assertEqual(stream.content_type, "image/png")
            self.assertEqual(stream.content_length, 5)
            self.assertEqual(b"".join(stream.iter_chunks()), b"image")
        finally:
            stream.close()

    def test_errors_are_propagated(self):
        self.stubber.add_client_error(
            "get_object", service_error_code="NoSuchKey", http_status_code=404
        )
        with self.assertRaises(ClientError):
            self.storage.get_stream("missing")


if __name__ == "__main__":
    unittest.main()
