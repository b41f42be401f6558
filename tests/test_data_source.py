import io
import threading
import zipfile
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import PurePosixPath

import pytest

from splatkit.data_source import DataSource, DataSourceError, SourceKind, normalize_url
from splatkit.vfs import InvalidHtmlError, UnknownDataTypeError

PLY_DATA = b"ply\nformat ascii 1.0\nend_header\n"
MISSING_PAGE = b"<!DOCTYPE html><p>missing</p>"


def _zip_bytes(entries):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def server():
    routes = {
        "/model.ply": PLY_DATA,
        "/scene.zip": _zip_bytes({"scene/cameras.json": b"[]"}),
    }

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            body = routes.get(self.path)
            status = 200
            if body is None:
                body, status = MISSING_PAGE, 404
            self.send_response(status)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    httpd = HTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_address[1]}"
    finally:
        httpd.shutdown()
        httpd.server_close()
        thread.join()


@pytest.mark.parametrize("text", ["http://example.com/a.ply", "https://example.com/a.zip"])
def test_parse_url(text):
    assert DataSource.parse(text) == DataSource(SourceKind.URL, text)


@pytest.mark.parametrize("text", ["example.com/a.ply", "/data/scene", "scene.zip"])
def test_parse_path(text):
    assert DataSource.parse(text) == DataSource(SourceKind.PATH, text)


def test_normalize_url_adds_scheme():
    assert normalize_url("example.com/splat.ply") == "https://example.com/splat.ply"


@pytest.mark.parametrize(
    "url", ["http://example.com/a.ply", "https://example.com/a.ply", "/server/a.ply"]
)
def test_normalize_url_keeps_full_and_rooted(url):
    assert normalize_url(url) == url


def test_value_rules():
    with pytest.raises(ValueError):
        DataSource(SourceKind.URL)
    with pytest.raises(ValueError):
        DataSource(SourceKind.PICK_FILE, "x.ply")


def test_path_into_vfs(tmp_path):
    target = tmp_path / "model.ply"
    target.write_bytes(PLY_DATA)
    vfs = DataSource.parse(str(target)).into_vfs()
    reader = vfs.reader_at_path("input.ply")
    try:
        assert reader.read() == PLY_DATA
    finally:
        reader.close()


def test_path_with_unknown_data(tmp_path):
    target = tmp_path / "notes.txt"
    target.write_bytes(b"just some text")
    with pytest.raises(DataSourceError) as info:
        DataSource(SourceKind.PATH, str(target)).into_vfs()
    assert isinstance(info.value.__cause__, UnknownDataTypeError)


def test_url_ply(server):
    vfs = DataSource.parse(server + "/model.ply").into_vfs()
    assert list(vfs.file_paths()) == [PurePosixPath("input.ply")]
    assert vfs.reader_at_path("input.ply").read() == PLY_DATA


def test_url_zip(server):
    vfs = DataSource.parse(server + "/scene.zip").into_vfs()
    assert vfs.file_count() == 1
    assert vfs.reader_at_path("scene/cameras.json").read() == b"[]"


def test_url_error_page(server):
    with pytest.raises(DataSourceError) as info:
        DataSource.parse(server + "/nothing.ply").into_vfs()
    cause = info.value.__cause__
    assert isinstance(cause, InvalidHtmlError)
    assert cause.html == MISSING_PAGE.decode()


def test_rooted_url_cannot_be_fetched():
    with pytest.raises(DataSourceError):
        DataSource(SourceKind.URL, "/model.ply").into_vfs()