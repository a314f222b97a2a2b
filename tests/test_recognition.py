import asyncio

import pytest

from app.services.recognition_service import (
    RecognitionFailed,
    RecognitionService,
    merge_recognized_items,
    parse_recognition_content,
    split_data_uri,
)


def test_split_data_uri():
    assert split_data_uri("data:image/png;base64,QUJD") == ("image/png", "QUJD")
    assert split_data_uri("QUJD") == ("image/jpeg", "QUJD")


def test_parse_skips_entries_without_description():
    items = parse_recognition_content(
        '{"items": [{"description": "  Anel  ", "price": "12,5"}, {"price": 3}, {"description": "Brinco", "price": -1}]}'
    )
    assert [(i.description, i.price) for i in items] == [("Anel", 12.5), ("Brinco", None)]


def test_parse_invalid_content():
    with pytest.raises(RecognitionFailed):
        parse_recognition_content("not json")
    with pytest.raises(RecognitionFailed):
        parse_recognition_content('{"other": 1}')
    with pytest.raises(RecognitionFailed):
        parse_recognition_content(None)


def test_recognize_sends_image_as_data_uri(recognition_service, fake_openai):
    items = asyncio.run(recognition_service.recognize("data:image/jpeg;base64,ring"))

    assert [(i.description, i.price) for i in items] == [("Anillo dorado", 100.0), ("Collar", None)]
    call = fake_openai.chat.completions.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    assert call["messages"][0]["content"][1]["image_url"]["url"] == "data:image/jpeg;base64,ring"


def test_recognize_reads_json_inside_markdown(recognition_service):
    items = asyncio.run(recognition_service.recognize("earrings"))
    assert [(i.description, i.price) for i in items] == [("Pendientes", 35.5)]


@pytest.mark.parametrize("image", ["boom", "garbage", "slow"])
def test_recognize_failures(recognition_service, image):
    with pytest.raises(RecognitionFailed):
        asyncio.run(recognition_service.recognize(image))


def test_recognize_without_client():
    with pytest.raises(RecognitionFailed):
        asyncio.run(RecognitionService(None).recognize("ring"))


def test_batch_reports_each_image(recognition_service):
    results = asyncio.run(recognition_service.recognize_batch(["ring", "boom", "earrings", "slow"]))

    assert [(r.index, r.ok) for r in results] == [(0, True), (1, False), (2, True), (3, False)]
    assert "connection reset" in results[1].error
    assert "timed out" in results[3].error
    assert [i.description for i in merge_recognized_items(results)] == ["Anillo dorado", "Collar", "Pendientes"]


def test_ocr_endpoint(client):
    r = client.post("/api/ocr", json={"image": "data:image/jpeg;base64,ring"})
    assert r.status_code == 200
    assert r.json() == {"items": [{"description": "Anillo dorado", "price": 100.0}, {"description": "Collar", "price": None}]}


def test_ocr_endpoint_failure(client):
    r = client.post("/api/ocr", json={"image": "boom"})
    assert r.status_code == 500
    assert r.json() == {"detail": "Failed to process image"}


def test_ocr_batch_endpoint_partial_failure(client):
    r = client.post("/api/ocr/batch", json={"images": ["ring", "garbage"]})
    assert r.status_code == 200
    body = r.json()
    assert [res["ok"] for res in body["results"]] == [True, False]
    assert body["results"][1]["items"] == []
    assert [i["description"] for i in body["items"]] == ["Anillo dorado", "Collar"]


def test_parse_prices_with_thousands_separator():
    items = parse_recognition_content(
        '{"items": [{"description": "Conjunto", "price": "R$ 1.234,56"}, {"description": "Anel", "price": "1234.5"}]}'
    )
    assert [i.price for i in items] == [1234.56, 1234.5]
