import pytest

pytest.importorskip("PIL")

from export import (ExportError, GraphImageRenderer, PDFExporter, VideoExporter,
                    export_png)
from settings import Settings
from traversal import bfs


def _rgb(hexc):
    hexc = hexc.lstrip("#")
    return tuple(int(hexc[i:i + 2], 16) for i in (0, 2, 4))


@pytest.fixture
def settings():
    return Settings(load=False)


def test_render_uses_state_colours(settings, triangle):
    triangle.get_node("B").state = "visiting"
    img = GraphImageRenderer(settings).render(triangle)
    a, b = triangle.get_node("A"), triangle.get_node("B")
    assert img.getpixel((int(a.x) + 12, int(a.y))) == _rgb("#2ecc71")
    assert img.getpixel((int(b.x) + 12, int(b.y))) == _rgb("#f39c12")
    assert img.getpixel((5, 495)) == _rgb(settings.get("CANVAS_BG"))


def test_render_frames_one_per_tick(settings, triangle):
    steps = bfs(triangle.adjacency, "A")
    images = GraphImageRenderer(settings).render_frames(triangle, steps)
    assert len(images) == len(steps) + 1
    a = triangle.get_node("A")
    assert images[0].getpixel((int(a.x) + 12, int(a.y))) == _rgb("#3498db")
    assert images[-1].getpixel((int(a.x) + 12, int(a.y))) == _rgb("#a0a0a0")


def test_export_png(settings, triangle, tmp_path):
    out = tmp_path / "graph.png"
    export_png(settings, triangle, str(out), selected="A")
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_export_png_bad_path(settings, triangle, tmp_path):
    with pytest.raises(ExportError):
        export_png(settings, triangle, str(tmp_path / "no" / "g.png"))


def test_export_pdf(settings, chain, tmp_path):
    pytest.importorskip("reportlab")
    out = tmp_path / "walk.pdf"
    PDFExporter(settings).export(chain, bfs(chain.adjacency, "A"), str(out),
                                 algorithm="bfs")
    assert out.read_bytes()[:4] == b"%PDF"


def test_export_pdf_needs_steps(settings, chain, tmp_path):
    pytest.importorskip("reportlab")
    with pytest.raises(ExportError):
        PDFExporter(settings).export(chain, [], str(tmp_path / "x.pdf"))


def test_export_video_cv2(settings, chain, tmp_path):
    pytest.importorskip("cv2")
    out = tmp_path / "walk.mp4"
    VideoExporter(settings).export_cv2(chain, bfs(chain.adjacency, "A"),
                                       str(out))
    assert out.stat().st_size > 0


def test_export_video_cv2_bad_path(settings, chain, tmp_path):
    pytest.importorskip("cv2")
    out = tmp_path / "no" / "such" / "walk.mp4"
    with pytest.raises(ExportError):
        VideoExporter(settings).export_cv2(chain, bfs(chain.adjacency, "A"),
                                           str(out))
    assert not out.exists()


def test_export_video_imageio(settings, chain, tmp_path):
    pytest.importorskip("imageio")
    pytest.importorskip("imageio_ffmpeg")
    out = tmp_path / "walk.mp4"
    VideoExporter(settings).export_imageio(chain, bfs(chain.adjacency, "A"),
                                           str(out))
    assert out.stat().st_size > 0


def test_export_video_imageio_bad_path(settings, chain, tmp_path):
    pytest.importorskip("imageio")
    pytest.importorskip("imageio_ffmpeg")
    with pytest.raises(ExportError):
        VideoExporter(settings).export_imageio(
            chain, bfs(chain.adjacency, "A"),
            str(tmp_path / "no" / "such" / "walk.mp4"))


def test_export_video_needs_steps(settings, chain, tmp_path):
    with pytest.raises(ExportError):
        VideoExporter(settings).export(chain, [], str(tmp_path / "v.mp4"))
