"""Signal schemas: patch body bounds and camelCase responses.

Invariants:
    - add/rm/erase default to empty lists
    - Tags are stripped; blank or overlong tags are rejected
    - url is 1-2048 chars
    - TagSignalResponse serializes signalsFor/signalsAgainst
"""

import pytest
from pydantic import ValidationError

from ficai_signals.schemas.signal import SignalPatch, TagSignalResponse

URL = "https://archiveofourown.org/works/11478249"


def test_lists_default_to_empty():
    patch = SignalPatch(url=URL)
    assert patch.add == patch.rm == patch.erase == []


def test_tags_are_stripped():
    assert SignalPatch(url=URL, add=["  fluff "]).add == ["fluff"]


@pytest.mark.parametrize("tag", ["", "   ", "x" * 201])
def test_bad_tags_rejected(tag):
    with pytest.raises(ValidationError):
        SignalPatch(url=URL, rm=[tag])


@pytest.mark.parametrize("url", ["", "x" * 2049])
def test_url_bounds(url):
    with pytest.raises(ValidationError):
        SignalPatch(url=url)


def test_tag_list_must_be_a_list():
    with pytest.raises(ValidationError):
        SignalPatch.model_validate({"url": URL, "add": "fluff"})


def test_tag_signal_response_uses_camel_case():
    dumped = TagSignalResponse(
        tag="fluff", signal=None, signals_for=2, signals_against=1,
    ).model_dump(by_alias=True)
    assert dumped == {
        "tag": "fluff", "signal": None, "signalsFor": 2, "signalsAgainst": 1,
    }
