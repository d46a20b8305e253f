# © 2026 Crest Advisory Group LLC. All rights reserved.
# PROPRIETARY AND CONFIDENTIAL. Unauthorized copying, distribution, or use is strictly prohibited.

"""
Unit tests for partial remote-upload configuration updates.
"""

import pytest
from pydantic import ValidationError

from src.api.schemas import RemoteUploadUpdate
from src.config.settings import FtpDestination, HttpDestination, RemoteUploadConfig, S3Destination


@pytest.fixture
def current() -> RemoteUploadConfig:
    return RemoteUploadConfig(
        enabled=False,
        s3=S3Destination(bucket="archive", region="eu-west-1", access_key_id="AK"),
        ftp=FtpDestination(host="ftp.local", username="u"),
        http=HttpDestination(url="https://sink.example.com", headers={"X-Token": "t"}),
    )


class TestApplyTo:
    def test_only_sent_keys_change(self, current: RemoteUploadConfig) -> None:
        update = RemoteUploadUpdate.model_validate({"destinations": {"s3": {"enabled": True}}})

        updated = update.apply_to(current)

        assert updated.s3.enabled is True
        assert updated.s3.bucket == "archive"
        assert updated.s3.access_key_id == "AK"
        assert updated.enabled is False
        assert updated.http == current.http

    def test_current_config_is_not_mutated(self, current: RemoteUploadConfig) -> None:
        RemoteUploadUpdate.model_validate({"enabled": True}).apply_to(current)
        assert current.enabled is False

    def test_camel_case_aliases(self, current: RemoteUploadConfig) -> None:
        body = {
            "destinations": {
                "s3": {"accessKeyId": "NEW", "secretAccessKey": "S"},
                "ftp": {"gatewayUrl": "https://gw.example.com"},
            }
        }
        updated = RemoteUploadUpdate.model_validate(body).apply_to(current)
        assert updated.s3.access_key_id == "NEW"
        assert updated.s3.secret_access_key == "S"
        assert updated.ftp.gateway_url == "https://gw.example.com"

    def test_null_values_are_ignored(self, current: RemoteUploadConfig) -> None:
        updated = RemoteUploadUpdate.model_validate({"destinations": {"http": {"url": None}}}).apply_to(current)
        assert updated.http.url == "https://sink.example.com"

    def test_http_method_is_uppercased(self, current: RemoteUploadConfig) -> None:
        updated = RemoteUploadUpdate.model_validate({"destinations": {"http": {"method": "put"}}}).apply_to(current)
        assert updated.http.method == "PUT"

    def test_headers_replace_whole_mapping(self, current: RemoteUploadConfig) -> None:
        body = {"destinations": {"http": {"headers": {"Authorization": "Bearer x"}}}}
        updated = RemoteUploadUpdate.model_validate(body).apply_to(current)
        assert updated.http.headers == {"Authorization": "Bearer x"}


class TestValidation:
    def test_ftp_port_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            RemoteUploadUpdate.model_validate({"destinations": {"ftp": {"port": 0}}})

    def test_unknown_keys_are_ignored(self) -> None:
        update = RemoteUploadUpdate.model_validate({"enabled": True, "verbose": True})
        assert update.enabled is True
