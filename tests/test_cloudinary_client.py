import cloudinary.uploader
import pytest
from cloudinary.exceptions import Error as CloudinaryError

from backoffice.core.exceptions import UpstreamError
from backoffice.domain.schemas.asset import IncomingFile
from backoffice.infrastructure.cloudinary_client import CloudinaryClient, CloudinaryConfig

CONFIG = CloudinaryConfig(cloud_name="demo", api_key="key123", api_secret="shh")


class FakeUploader:
    """Stands in for cloudinary.uploader; records (name, args, options) per call."""

    def __init__(self):
        self.calls = []
        self.responses = {
            "upload": {"public_id": "user-profiles/abc", "secure_url": "https://res/abc.png"},
            "destroy": {"result": "ok"},
        }

    def _answer(self, name, args, options):
        self.calls.append((name, args, options))
        response = self.responses[name]
        if isinstance(response, Exception):
            raise response
        return response

    def upload(self, *args, **options):
        return self._answer("upload", args, options)

    def destroy(self, *args, **options):
        return self._answer("destroy", args, options)


@pytest.fixture
def sdk(monkeypatch):
    fake = FakeUploader()
    monkeypatch.setattr(cloudinary.uploader, "upload", fake.upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", fake.destroy)
    return fake


def test_upload_passes_credentials_folder_and_size_limit_per_call(sdk):
    ref = CloudinaryClient(CONFIG).upload(IncomingFile("lamp.png", b"\x89PNG", "image/png"))

    assert ref.public_id == "user-profiles/abc"
    assert ref.url == "https://res/abc.png"

    name, args, options = sdk.calls[0]
    assert name == "upload"
    assert args[0].read() == b"\x89PNG"
    assert options["filename"] == "lamp.png"
    assert options["folder"] == "user-profiles"
    assert options["allowed_formats"] == ["jpg", "jpeg", "png"]
    assert options["transformation"] == [{"width": 500, "height": 500, "crop": "limit"}]
    assert (options["cloud_name"], options["api_key"], options["api_secret"]) == ("demo", "key123", "shh")


def test_destroy_invalidates_cached_copies(sdk):
    CloudinaryClient(CONFIG).destroy("user-profiles/abc")

    name, args, options = sdk.calls[0]
    assert (name, args) == ("destroy", ("user-profiles/abc",))
    assert options["invalidate"] is True
    assert options["api_secret"] == "shh"


def test_destroy_of_missing_asset_is_not_an_error(sdk):
    sdk.responses["destroy"] = {"result": "not found"}
    CloudinaryClient(CONFIG).destroy("gone")


def test_destroy_refused_by_host(sdk):
    sdk.responses["destroy"] = {"result": "error"}
    with pytest.raises(UpstreamError):
        CloudinaryClient(CONFIG).destroy("abc")


def test_sdk_failure_becomes_upstream_error(sdk):
    sdk.responses["upload"] = CloudinaryError("Invalid image file")

    with pytest.raises(UpstreamError) as exc:
        CloudinaryClient(CONFIG).upload(IncomingFile("lamp.png", b"\x89PNG"))

    assert exc.value.status_code == 500
    assert exc.value.details == {"operation": "upload", "reason": "Invalid image file"}


def test_unconfigured_client_refuses_to_call_out(sdk):
    client = CloudinaryClient(CloudinaryConfig(cloud_name="", api_key="", api_secret=""))
    with pytest.raises(UpstreamError):
        client.destroy("abc")
    assert sdk.calls == []
