import pytest

from constants import UploadKind
from exceptions import ValidationError
from services.content_negotiator import negotiate, negotiate_image, negotiate_video, parse_media_type


@pytest.mark.parametrize("header", [None, "", "   "])
def test_missing_header_rejected(header):
    with pytest.raises(ValidationError):
        parse_media_type(header)


@pytest.mark.parametrize("header", ["image", "imagepng", "png", "video-mp4"])
def test_header_without_slash_rejected(header):
    with pytest.raises(ValidationError):
        negotiate_image(header)
    with pytest.raises(ValidationError):
        negotiate_video(header)


@pytest.mark.parametrize("header", ["image/", "/png", "image/png/extra", "/"])
def test_header_must_have_two_non_empty_parts(header):
    with pytest.raises(ValidationError):
        parse_media_type(header)


@pytest.mark.parametrize("header,sub_type", [
    ("image/png", "png"),
    ("image/jpeg", "jpeg"),
    ("image/webp", "webp"),
    ("image/x-custom", "x-custom"),
])
def test_image_accepts_any_sub_type(header, sub_type):
    media_type = negotiate_image(header)
    assert media_type.main_type == "image"
    assert media_type.sub_type == sub_type


def test_image_rejects_other_main_types():
    with pytest.raises(ValidationError):
        negotiate_image("video/mp4")
    with pytest.raises(ValidationError):
        negotiate_image("application/octet-stream")


def test_parameters_are_dropped_and_case_folded():
    media_type = negotiate_video("Video/MP4; codecs=avc1")
    assert media_type.mime == "video/mp4"
    assert negotiate_image("image/PNG;q=1").sub_type == "png"


def test_video_accepts_only_mp4():
    assert negotiate_video("video/mp4").mime == "video/mp4"


@pytest.mark.parametrize("header", [
    "video/webm",
    "video/quicktime",
    "image/mp3",
    "application/json",
])
def test_video_rejects_non_mp4_sub_type_regardless_of_main_type(header):
    with pytest.raises(ValidationError):
        negotiate_video(header)


def test_video_rejects_mp4_sub_type_with_wrong_main_type():
    with pytest.raises(ValidationError):
        negotiate_video("audio/mp4")


def test_negotiate_dispatches_by_kind():
    assert negotiate(UploadKind.THUMBNAIL, "image/gif").sub_type == "gif"
    with pytest.raises(ValidationError):
        negotiate(UploadKind.VIDEO, "image/gif")
