import io

import pymupdf
import pytest

from flet_coord_picker import CoordDocument
from flet_coord_picker.backends.pymupdf import PyMuPDFBackend


@pytest.fixture
def pdf_bytes():
    doc = pymupdf.open()
    doc.new_page(width=200, height=100)
    doc.new_page(width=300, height=400)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def png_bytes():
    pix = pymupdf.Pixmap(pymupdf.csRGB, pymupdf.IRect(0, 0, 40, 20), False)
    pix.clear_with(255)
    return pix.tobytes("png")


def test_open_pdf_from_bytes(pdf_bytes) -> None:
    backend = PyMuPDFBackend(pdf_bytes)

    assert backend.page_count == 2
    assert backend.file_type == "pdf"
    assert backend.get_page_size(0) == (200, 100)
    assert backend.get_page_size(1) == (300, 400)


def test_open_pdf_from_path(tmp_path, pdf_bytes) -> None:
    path = tmp_path / "sample.pdf"
    path.write_bytes(pdf_bytes)

    with PyMuPDFBackend(path) as backend:
        assert backend.page_count == 2


def test_open_from_bytesio(pdf_bytes) -> None:
    backend = PyMuPDFBackend(io.BytesIO(pdf_bytes))

    assert backend.page_count == 2


def test_render_scale_sets_raster_size(pdf_bytes) -> None:
    backend = PyMuPDFBackend(pdf_bytes)

    raster = backend.get_page(0, 1.5)

    assert (raster.width, raster.height) == (300, 150)
    assert raster.scale == 1.5
    assert raster.page_number == 1
    assert raster.png.startswith(b"\x89PNG")


def test_rasters_are_cached_per_scale(pdf_bytes) -> None:
    backend = PyMuPDFBackend(pdf_bytes)

    first = backend.get_page(1, 1.0)

    assert backend.get_page(1, 1.0) is first
    assert backend.get_page(1, 2.0) is not first


def test_page_index_out_of_range(pdf_bytes) -> None:
    backend = PyMuPDFBackend(pdf_bytes)

    with pytest.raises(IndexError):
        backend.get_page(2)
    with pytest.raises(IndexError):
        backend.get_page_size(-1)


def test_non_positive_render_scale_is_rejected(pdf_bytes) -> None:
    backend = PyMuPDFBackend(pdf_bytes)

    with pytest.raises(ValueError, match="must be positive"):
        backend.get_page(0, 0)


def test_unsupported_source_object() -> None:
    with pytest.raises(TypeError):
        PyMuPDFBackend(123)


def test_unsupported_file_type(pdf_bytes, tmp_path) -> None:
    with pytest.raises(ValueError, match="Unsupported file type"):
        PyMuPDFBackend(pdf_bytes, filetype="text/plain")

    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(ValueError, match="Unsupported file type"):
        PyMuPDFBackend(path)


def test_image_uses_native_pixel_size(png_bytes) -> None:
    backend = PyMuPDFBackend(png_bytes, filetype="image/png")

    assert backend.file_type == "image"
    assert backend.page_count == 1
    assert backend.get_page_size(0) == (40, 20)

    raster = backend.get_page(0, 2.0)
    assert raster.width == pytest.approx(80, abs=1)
    assert raster.height == pytest.approx(40, abs=1)


def test_image_filetype_from_file_name(png_bytes) -> None:
    backend = PyMuPDFBackend(png_bytes, filetype="scan.png")

    assert backend.file_type == "image"


@pytest.fixture
def encrypted_pdf():
    doc = pymupdf.open()
    doc.new_page(width=100, height=100)
    data = doc.tobytes(
        encryption=pymupdf.PDF_ENCRYPT_AES_256,
        owner_pw="owner",
        user_pw="secret",
    )
    doc.close()
    return data


def test_encrypted_pdf_requires_password(encrypted_pdf) -> None:
    with pytest.raises(ValueError, match="requires a password"):
        PyMuPDFBackend(encrypted_pdf)


def test_encrypted_pdf_rejects_wrong_password(encrypted_pdf) -> None:
    with pytest.raises(ValueError, match="Invalid password"):
        PyMuPDFBackend(encrypted_pdf, password="nope")


@pytest.mark.parametrize("password", [None, "nope"])
def test_failed_authentication_closes_document(monkeypatch, encrypted_pdf, password) -> None:
    opened = []
    real_open = pymupdf.open

    def recording_open(*args, **kwargs):
        doc = real_open(*args, **kwargs)
        opened.append(doc)
        return doc

    monkeypatch.setattr(pymupdf, "open", recording_open)

    with pytest.raises(ValueError):
        PyMuPDFBackend(encrypted_pdf, password=password)

    assert len(opened) == 1
    assert opened[0].is_closed


def test_encrypted_pdf_opens_with_password(encrypted_pdf) -> None:
    backend = PyMuPDFBackend(encrypted_pdf, password="secret")

    assert backend.page_count == 1


@pytest.mark.parametrize(
    "name, supported, kind",
    [
        ("report.pdf", True, "pdf"),
        ("application/pdf", True, "pdf"),
        ("Scan.PNG", True, "image"),
        ("photo.jpeg", True, "image"),
        ("image/svg+xml", True, "image"),
        ("tif", True, "image"),
        ("notes.txt", False, "unknown"),
        ("image/webp", False, "unknown"),
    ],
)
def test_type_detection(name, supported, kind) -> None:
    assert PyMuPDFBackend.is_supported(name) is supported
    assert PyMuPDFBackend.type_of(name) == kind


def test_coord_document_delegates(pdf_bytes) -> None:
    document = CoordDocument(pdf_bytes)

    assert document.page_count == 2
    assert document.file_type == "pdf"
    assert document.get_page_size(1) == (300, 400)
    assert document.get_page(0, 1.0).width == 200

    document.close()
    document.close()
