from datetime import datetime

import pytest

from constants import UploadKind
from domain.value_objects import AssetReference, MediaType
from exceptions import AuthorizationError, NotFoundError
from services.metadata_synchronizer import MetadataSynchronizer
from conftest import StepClock


def _video_asset(key="abc.mp4"):
    return AssetReference(key, MediaType("video", "mp4"), f"https://b.s3.r.amazonaws.com/{key}")


def _thumb_asset():
    return AssetReference("v1.png", MediaType("image", "png"), "http://localhost:8091/assets/v1.png")


def test_synchronize_replaces_only_the_target_reference(repository, video_v1):
    synchronizer = MetadataSynchronizer(repository, StepClock())
    synchronizer.synchronize("v1", "u1", UploadKind.THUMBNAIL, _thumb_asset())

    before = repository.get("v1")
    after = synchronizer.synchronize("v1", "u1", UploadKind.VIDEO, _video_asset())

    assert after.video_ref == _video_asset()
    assert after.thumbnail_ref == before.thumbnail_ref
    assert (after.id, after.title, after.description, after.owner_id, after.created_at) == (
        before.id, before.title, before.description, before.owner_id, before.created_at
    )
    assert after.updated_at > before.updated_at
    assert repository.get("v1") == after


def test_wrong_owner_changes_nothing(repository, video_v1):
    before = repository.get("v1")
    synchronizer = MetadataSynchronizer(repository)

    with pytest.raises(AuthorizationError):
        synchronizer.synchronize("v1", "u2", UploadKind.THUMBNAIL, _thumb_asset())

    assert repository.get("v1") == before


def test_unknown_video(repository):
    with pytest.raises(NotFoundError):
        MetadataSynchronizer(repository).synchronize("nope", "u1", UploadKind.VIDEO, _video_asset())


def test_updated_at_strictly_increases_even_when_clock_stalls(repository, video_v1):
    frozen = datetime(2024, 1, 1, 9, 0, 0)  # same instant the record was created
    synchronizer = MetadataSynchronizer(repository, lambda: frozen)

    first = synchronizer.synchronize("v1", "u1", UploadKind.THUMBNAIL, _thumb_asset())
    second = synchronizer.synchronize("v1", "u1", UploadKind.THUMBNAIL, _thumb_asset())

    assert first.updated_at > video_v1.created_at
    assert second.updated_at > first.updated_at
