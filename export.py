"""
╔══════════════════════════════════════════════════════════════════╗
║         Graph Traversal Visualizer v1.0 — EXPORT                 ║
║                                                                  ║
║  Off-screen rendering of the graph and of a traversal replay.    ║
║                                                                  ║
║    GraphImageRenderer ──► PNG snapshot                           ║
║            │                                                     ║
║            ├──────────► PDFExporter   (one page per tick)        ║
║            └──────────► VideoExporter (MP4, OpenCV / imageio)    ║
║                                                                  ║
║  Frames come from animation.replay_frames(), so exporting never  ║
║  disturbs the live graph or a running animation.                 ║
║                                                                  ║
║  Dependencies                                                    ║
║  ────────────                                                    ║
║  Pillow            → all rendering                               ║
║  reportlab         → PDF walkthrough                             ║
║  opencv + numpy    → MP4 video (preferred)                       ║
║  imageio           → MP4 video (fallback)                        ║
╚══════════════════════════════════════════════════════════════════╝
"""

import logging
import os
import shutil
import tempfile
from datetime import datetime

from animation import replay_frames
from graph_model import DEFAULT

# ═════════════════════════════════════════════════════════════════
#  OPTIONAL THIRD-PARTY IMPORTS
#  Each export format checks its flag and raises ExportError with
#  an install hint instead of failing at import time.
# ═════════════════════════════════════════════════════════════════
try:
    from PIL import Image, ImageDraw, ImageFont
    HAS_PIL = True
except ImportError:
    HAS_PIL = False

try:
    import cv2
    import numpy as np
    HAS_CV2 = True
except ImportError:
    HAS_CV2 = False

try:
    import imageio
    import numpy as np
    HAS_IMAGEIO = True
except ImportError:
    HAS_IMAGEIO = False

try:
    from reportlab.lib.pagesizes import A4, landscape
    from reportlab.pdfgen import canvas as pdf_canvas
    HAS_REPORTLAB = True
except ImportError:
    HAS_REPORTLAB = False

_LOGGER = logging.getLogger(__name__)


class ExportError(Exception):
    """An export could not be produced (missing library or I/O)."""


def _require(flag, what):
    if not flag:
        raise ExportError(f"{what} required.\npip install {what}")


# ═════════════════════════════════════════════════════════════════
#  GRAPH IMAGE RENDERER
# ═════════════════════════════════════════════════════════════════
class GraphImageRenderer:
    """
    Off-screen graph renderer using Pillow.

    Draws edges first and nodes on top, so lines end underneath the
    circles, the same layering the canvas uses.

    Args:
        settings (Settings): For colour lookups.
        width    (int)     : Image width in pixels.
        height   (int)     : Image height in pixels.
    """

    def __init__(self, settings, width=800, height=500):
        self.settings = settings
        self.width    = width
        self.height   = height

    @staticmethod
    def _load_font(size):
        """Bold sans font for labels; Pillow's bitmap font as last resort."""
        for p in ("arialbd.ttf",
                  "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
                  "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
                  "/System/Library/Fonts/Helvetica.ttc"):
            try:
                return ImageFont.truetype(p, size)
            except OSError:
                continue
        return ImageFont.load_default()

    def render(self, graph, states=None, title="", selected=None):
        """
        Render the graph to a Pillow Image.

        Args:
            graph    (Graph)          : Nodes/edges to draw.
            states   (dict | None)    : node id → visual state; defaults
                                        to each node's live state.
            title    (str)            : Caption drawn top-left.
            selected (str | None)     : Node id drawn with a highlight ring.

        Returns:
            Image
        """
        _require(HAS_PIL, "Pillow")
        s = self.settings
        img  = Image.new("RGB", (self.width, self.height), s.get("CANVAS_BG"))
        draw = ImageDraw.Draw(img)
        font = self._load_font(16)

        for edge in graph.edges:
            a, b = graph.get_node(edge.source), graph.get_node(edge.target)
            draw.line([(a.x, a.y), (b.x, b.y)], fill=s.get("EDGE"), width=2)

        for node in graph.nodes:
            state = node.state if states is None else states.get(node.id, DEFAULT)
            r = node.radius
            ring = node.id == selected
            draw.ellipse([node.x - r, node.y - r, node.x + r, node.y + r],
                         fill=s.state_color(state),
                         outline=s.get("YELLOW_C") if ring else s.get("NODE_OUTLINE"),
                         width=4 if ring else 2)
            bb = draw.textbbox((0, 0), node.id, font=font)
            tw, th = bb[2] - bb[0], bb[3] - bb[1]
            draw.text((node.x - tw // 2, node.y - th // 2), node.id,
                      fill=s.get("NODE_TEXT"), font=font)

        if title:
            draw.text((10, 8), title, fill=s.get("NODE_OUTLINE"),
                      font=self._load_font(14))
        return img

    def render_frames(self, graph, steps):
        """One image per animation tick of *steps*."""
        frames = replay_frames(graph, steps)
        images = []
        for i, states in enumerate(frames):
            if i < len(steps):
                st = steps[i]
                title = f"Step {i + 1}/{len(steps)}: {st.id} -> {st.state}"
            else:
                title = "Traversal complete"
            images.append(self.render(graph, states, title))
        return images


def export_png(settings, graph, filename, selected=None):
    """Save a snapshot of the current graph as PNG."""
    img = GraphImageRenderer(settings).render(graph, selected=selected)
    try:
        img.save(filename)
    except OSError as e:
        raise ExportError(str(e)) from e
    _LOGGER.info("exported PNG to %s", filename)


# ═════════════════════════════════════════════════════════════════
#  PDF EXPORTER
#
#  Title page, one page per animation tick, summary page.
# ═════════════════════════════════════════════════════════════════
class PDFExporter:
    """
    Export a traversal replay as a landscape-A4 PDF walkthrough.

    Attributes:
        settings (Settings)           : For colour/theme lookups.
        renderer (GraphImageRenderer) : Renders each frame.
    """

    def __init__(self, settings):
        self.settings = settings
        self.renderer = GraphImageRenderer(settings, 800, 500)

    def export(self, graph, steps, filename, algorithm=""):
        """
        Write the PDF.

        Args:
            graph     (Graph)      : Graph the steps were generated on.
            steps     (list[Step]) : Traversal steps.
            filename  (str)        : Output PDF path.
            algorithm (str)        : "bfs" / "dfs", shown on the title page.
        """
        _require(HAS_REPORTLAB, "reportlab")
        _require(HAS_PIL, "Pillow")
        if not steps:
            raise ExportError("Run a traversal first.")

        pw, ph = landscape(A4)
        c = pdf_canvas.Canvas(filename, pagesize=landscape(A4))

        # ── Title page ──
        c.setFont("Helvetica-Bold", 28)
        c.drawCentredString(pw / 2, ph - 100, "Graph Traversal Walkthrough")
        c.setFont("Helvetica", 16)
        c.drawCentredString(pw / 2, ph - 140,
                            f"{algorithm.upper() or 'Traversal'} from {steps[0].id}")
        c.setFont("Helvetica", 12)
        c.drawCentredString(pw / 2, ph - 180,
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
        c.drawCentredString(pw / 2, ph - 200, f"Total Steps: {len(steps)}")
        c.showPage()

        # ── One page per tick ──
        tmp = tempfile.mkdtemp()
        try:
            images = self.renderer.render_frames(graph, steps)
            for i, img in enumerate(images):
                ip = os.path.join(tmp, f"s{i:04d}.png")
                img.save(ip)
                c.setFont("Helvetica-Bold", 14)
                c.drawString(30, ph - 30, f"Frame {i + 1} of {len(images)}")
                c.drawImage(ip, 30, ph - 470, width=640, height=400,
                            preserveAspectRatio=True)
                c.showPage()

            # ── Summary ──
            c.setFont("Helvetica-Bold", 20)
            c.drawCentredString(pw / 2, ph - 100, "Summary")
            c.setFont("Helvetica", 12)
            visit_order = [st.id for st in steps if st.state == "visiting"]
            y = ph - 150
            for line in [f"Nodes: {graph.node_count}",
                         f"Edges: {graph.edge_count}",
                         f"Total Steps: {len(steps)}",
                         f"Visit order: {' -> '.join(visit_order)}"]:
                c.drawString(100, y, line)
                y -= 22
            c.showPage()
            c.save()
        except OSError as e:
            raise ExportError(str(e)) from e
        finally:
            shutil.rmtree(tmp, ignore_errors=True)
        _LOGGER.info("exported PDF walkthrough to %s", filename)


# ═════════════════════════════════════════════════════════════════
#  VIDEO EXPORTER
#
#  OpenCV first, imageio as a fallback.  Each tick is held for
#  ``fps`` frames so one tick lasts one second of video.
# ═════════════════════════════════════════════════════════════════
class VideoExporter:
    """
    Export a traversal replay as MP4.

    Attributes:
        settings (Settings)           : For colour/theme lookups.
        renderer (GraphImageRenderer) : Renders frames at 800×500.
    """

    def __init__(self, settings):
        self.settings = settings
        self.renderer = GraphImageRenderer(settings, 800, 500)

    def export(self, graph, steps, filename, fps=2):
        """Use whichever backend is installed."""
        if HAS_CV2:
            return self.export_cv2(graph, steps, filename, fps)
        if HAS_IMAGEIO:
            return self.export_imageio(graph, steps, filename, fps)
        raise ExportError("opencv-python or imageio required.")

    def export_cv2(self, graph, steps, filename, fps=2):
        _require(HAS_CV2, "opencv-python")
        _require(HAS_PIL, "Pillow")
        if not steps:
            raise ExportError("Run a traversal first.")
        fourcc = cv2.VideoWriter_fourcc(*"mp4v")
        out = cv2.VideoWriter(filename, fourcc, fps,
                              (self.renderer.width, self.renderer.height))
        if not out.isOpened():
            out.release()
            raise ExportError(f"Cannot write video to {filename}")
        try:
            for img in self.renderer.render_frames(graph, steps):
                bgr = cv2.cvtColor(np.array(img), cv2.COLOR_RGB2BGR)
                for _ in range(max(1, fps)):
                    out.write(bgr)
        finally:
            out.release()
        _LOGGER.info("exported video (OpenCV) to %s", filename)

    def export_imageio(self, graph, steps, filename, fps=2):
        _require(HAS_IMAGEIO, "imageio")
        _require(HAS_PIL, "Pillow")
        if not steps:
            raise ExportError("Run a traversal first.")
        frames = []
        for img in self.renderer.render_frames(graph, steps):
            frames.extend([np.array(img)] * max(1, fps))
        try:
            imageio.mimwrite(filename, frames, fps=fps)
        except (OSError, ValueError, RuntimeError) as e:
            # RuntimeError: no ffmpeg backend for .mp4
            raise ExportError(str(e)) from e
        _LOGGER.info("exported video (imageio) to %s", filename)
