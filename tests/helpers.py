import json

from gallery.fetcher import FetchResult

PROVIDER_URL = "https://randomfox.test/floof/"


def fox_result(image: str, link: str, status_code: int = 200) -> FetchResult:
    return FetchResult(
        url=PROVIDER_URL,
        status_code=status_code,
        content=json.dumps({"image": image, "link": link}).encode(),
        content_type="application/json",
    )


def fox_body(image: str, link: str) -> dict:
    return {"image": image, "link": link}
