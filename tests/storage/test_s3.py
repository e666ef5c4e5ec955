from unittest.mock import MagicMock, patch

from invoicely.storage.s3 import S3Storage


def _storage(**overrides):
    defaults = dict(bucket="my-bucket", region="us-east-1", access_key_id="key", secret_access_key="secret")
    defaults.update(overrides)
    return S3Storage(**defaults)


class TestS3Storage:
    @patch("invoicely.storage.s3.boto3")
    def test_save_calls_put_object(self, mock_boto3):
        mock_client = MagicMock()
        mock_boto3.client.return_value = mock_client

        result = _storage().save("invoices/abc.pdf", b"data")

        mock_client.put_object.assert_called_once_with(
            Bucket="my-bucket",
            Key="invoices/abc.pdf",
            Body=b"data",
            ContentType="application/pdf",
        )
        assert result == "invoices/abc.pdf"

    @patch("invoicely.storage.s3.boto3")
    def test_get_reads_body(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.get_object.return_value = {"Body": MagicMock(read=MagicMock(return_value=b"pdf"))}
        mock_boto3.client.return_value = mock_client

        assert _storage().get("k") == b"pdf"

    @patch("invoicely.storage.s3.boto3")
    def test_get_url_generates_presigned(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.generate_presigned_url.return_value = "https://presigned-url"
        mock_boto3.client.return_value = mock_client

        url = _storage(presigned_expiry=60).get_url("k")

        assert url == "https://presigned-url"
        mock_client.generate_presigned_url.assert_called_once_with(
            "get_object",
            Params={"Bucket": "my-bucket", "Key": "k"},
            ExpiresIn=60,
        )

    @patch("invoicely.storage.s3.boto3")
    def test_custom_endpoint(self, mock_boto3):
        _storage(endpoint_url="http://minio:9000")
        assert mock_boto3.client.call_args.kwargs["endpoint_url"] == "http://minio:9000"

    @patch("invoicely.storage.s3.boto3")
    def test_delete_calls_delete_object(self, mock_boto3):
        mock_client = MagicMock()
        mock_boto3.client.return_value = mock_client

        _storage().delete("invoices/abc.pdf")

        mock_client.delete_object.assert_called_once_with(Bucket="my-bucket", Key="invoices/abc.pdf")
