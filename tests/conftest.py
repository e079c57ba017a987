import json
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import bazel_view_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def build_info_data() -> dict:
    """Return a valid build-info document."""
    return {
        "label": "//java/com/example:lib",
        "kind": "java_library",
        "build_file_artifact_location": "java/com/example/BUILD",
        "dependencies": ["//third_party:guava", "//java/com/example/util:util"],
        "sources": ["java/com/example/Lib.java"],
        "jars": [
            {
                "jar": "bazel-bin/java/com/example/liblib.jar",
                "interface_jar": "bazel-bin/java/com/example/liblib-hjar.jar",
                "srcjar": "bazel-bin/java/com/example/liblib-src.jar",
            }
        ],
        "generated_jars": [],
    }


@pytest.fixture
def write_json(tmp_path: Path):
    """Return a helper that writes a JSON document under tmp_path."""
    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
