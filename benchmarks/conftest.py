from __future__ import annotations

import pytest


@pytest.fixture(scope="session")
def medium_context() -> dict[str, object]:
    return {
        "user": {
            "name": "Ada",
            "bio": None,
            "posts": [
                {"title": f"Post {i}", "content": "Lorem ipsum dolor sit amet. " * 4}
                for i in range(10)
            ],
        },
    }
