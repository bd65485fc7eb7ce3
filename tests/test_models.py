import dataclasses

import pytest

from smugapi.smugmug import models
from smugapi.smugmug.models import (
    Album,
    AlbumTemplate,
    AlbumTransferStats,
    Category,
    Image,
    ImageEXIF,
    ImageTransferStats,
    Login,
)

ALL_MODELS = (
    Album,
    AlbumTemplate,
    AlbumTransferStats,
    Category,
    Image,
    ImageEXIF,
    ImageTransferStats,
    Login,
)


def api_fields(model_cls):
    return [f for f in dataclasses.fields(model_cls) if "api" in f.metadata]


def sample_value(field, index):
    """A distinct, non-default value for one field."""

    api = field.metadata["api"]
    nested = models._MODELS.get(api.model)

    if api.kind == "str":
        return f"{field.name}-{index}"
    if api.kind == "int":
        return index
    if api.kind == "float":
        return index + 0.25
    if api.kind == "bool":
        return index % 2 == 0
    if api.kind == "model":
        return nested.from_api_response({"id": 1000 + index})
    return (
        nested.from_api_response({"id": 2000 + index}),
        nested.from_api_response({"id": 3000 + index}),
    )


def populated(model_cls):
    values = {f.name: sample_value(f, i) for i, f in enumerate(api_fields(model_cls))}
    return model_cls(**values)


@pytest.mark.parametrize("model_cls", ALL_MODELS)
def test_round_trip_every_field(model_cls):

    original = populated(model_cls)
    parsed = model_cls.from_api_response(original.to_api_dict())

    assert parsed == original


@pytest.mark.parametrize("model_cls", ALL_MODELS)
def test_empty_object_leaves_every_field_absent(model_cls):

    parsed = model_cls.from_api_response({})

    for field in api_fields(model_cls):
        value = getattr(parsed, field.name)
        if field.metadata["api"].kind == "models":
            assert value == ()
        else:
            assert value is None


@pytest.mark.parametrize("model_cls", ALL_MODELS)
def test_each_field_can_be_missing(model_cls):

    for field in api_fields(model_cls):
        *parents, name = field.metadata["api"].key.split(".")
        document = populated(model_cls).to_api_dict()
        container = document
        for parent in parents:
            container = container[parent]
        del container[name]

        parsed = model_cls.from_api_response(document)
        assert getattr(parsed, field.name) in (None, ())

        # Everything else survives.
        expected = dataclasses.replace(
            populated(model_cls),
            **{field.name: () if field.metadata["api"].kind == "models" else None}
        )
        assert parsed == expected


@pytest.mark.parametrize("model_cls", ALL_MODELS)
def test_none_yields_empty_instance(model_cls):
    assert model_cls.from_api_response(None) == model_cls()


@pytest.mark.parametrize("model_cls", ALL_MODELS)
def test_boolean_fields_accept_numeric_encoding(model_cls):

    for field in api_fields(model_cls):
        if field.metadata["api"].kind != "bool":
            continue
        key = field.metadata["api"].key

        assert getattr(model_cls.from_api_response({key: 1}), field.name) is True
        assert getattr(model_cls.from_api_response({key: 0}), field.name) is False
        assert getattr(model_cls.from_api_response({key: "1"}), field.name) is True
        assert getattr(model_cls.from_api_response({key: "0"}), field.name) is False
        assert getattr(model_cls.from_api_response({}), field.name) is None


def test_album_nested_objects():

    album = Album.from_api_response({
        "id": 10,
        "Key": "k10",
        "Category": {"id": 3, "Name": "Other"},
        "Highlight": {"id": 77, "Key": "hl"},
        "Template": {"id": 4},
        "Watermark": {"id": 9},
    })

    assert album.category == Category(id=3, name="Other")
    assert album.highlight.id == 77
    assert album.highlight.key == "hl"
    assert album.template_id == 4
    assert album.watermark_id == 9
    assert album.sub_category is None
    assert album.community_id is None


def test_image_backreferences_album():

    image = Image.from_api_response({"id": 5, "Album": {"id": 6, "Key": "a6"}})

    assert image.album == Album(id=6, key="a6")
    assert Image.from_api_response({"id": 5}).album is None


def test_category_tree():

    category = Category.from_api_response({
        "id": 1,
        "Title": "Travel",
        "Albums": [{"id": 11, "Title": "Paris"}, "not an album"],
        "SubCategories": [
            {"id": 2, "Title": "Europe", "Albums": [{"id": 12}]},
        ],
    })

    assert category.name == "Travel"
    assert [album.id for album in category.albums] == [11]
    assert len(category.sub_categories) == 1
    assert category.sub_categories[0].name == "Europe"
    assert category.sub_categories[0].albums[0].id == 12
    assert category.sub_categories[0].sub_categories == ()


def test_category_missing_lists_are_empty():

    category = Category.from_api_response({"id": 1})

    assert category.albums == ()
    assert category.sub_categories == ()
    assert list(category.albums) == []


def test_category_name_fallback():
    assert Category.from_api_response({"id": 1, "Title": "Both", "Name": "Other"}).name == "Both"
    assert Category.from_api_response({"id": 1, "Name": "Fallback"}).name == "Fallback"
    assert Category.from_api_response({"id": 1}).name is None


def test_category_empty_title_defers_to_name():
    assert Category.from_api_response({"id": 1, "Title": ""}).name is None
    assert Category.from_api_response({"id": 1, "Title": "", "Name": "Other"}).name == "Other"


def test_category_parent_is_not_owned():

    category = Category.from_api_response({"id": 8, "Category": {"id": 1}})

    assert category.parent_id == 1
    assert category.sub_categories == ()


def test_album_transfer_stats_images():

    stats = AlbumTransferStats.from_api_response({
        "id": 4,
        "Bytes": 1024,
        "Original": 2.5,
        "Images": [{"id": 1, "Bytes": 512}, {"id": 2, "Bytes": 512}],
    })

    assert stats.bytes == 1024
    assert stats.original == 2.5
    assert [image.bytes for image in stats.images] == [512, 512]
    assert AlbumTransferStats.from_api_response({"id": 4}).images == ()


def test_login_nested_fields():

    login = Login.from_api_response({
        "Session": {"id": "s1"},
        "User": {"id": 42, "NickName": "nick", "DisplayName": "Nick"},
        "PasswordHash": "hash",
    })

    assert login.session_id == "s1"
    assert login.user_id == 42
    assert login.nick_name == "nick"
    assert login.display_name == "Nick"
    assert login.password_hash == "hash"
    assert login.account_type is None


def test_to_api_dict_omits_unset_fields():

    album = Album(id=100, key="abc", title="Trip", template_id=7)

    assert album.to_api_dict() == {
        "id": 100,
        "Key": "abc",
        "Title": "Trip",
        "Template": {"id": 7},
    }


def test_image_has_gps():
    assert Image(latitude=1.0, longitude=2.0).has_gps
    assert not Image(latitude=1.0).has_gps


def test_models_are_immutable():
    album = Album(id=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        album.id = 2
