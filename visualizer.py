"""
╔══════════════════════════════════════════════════════════════════╗
║        Graph Traversal Visualizer v1.0 — MAIN WINDOW             ║
║                                                                  ║
║  Architecture                                                    ║
║  ────────────                                                    ║
║  ┌──────────────┐  clicks /  ┌────────────────┐  steps           ║
║  │ Traversal-   │ ─commands─►│ GraphController│ ──────► Player   ║
║  │   Window     │ ◄─redraw── │  (Graph)       │ ◄─after() ticks  ║
║  └──────┬───────┘            └────────────────┘                  ║
║         ├── MatrixWindow      adjacency matrix table             ║
║         ├── SettingsDialog    theme, speed, colours              ║
║         └── export.py         PNG / PDF / MP4                    ║
║                                                                  ║
║  Usage                                                           ║
║  ─────                                                           ║
║  1. Click empty canvas          → new node (A, B, C, …)          ║
║  2. Click node, then another    → edge between them              ║
║  3. BFS / DFS, then click node  → animated traversal             ║
║  4. Matrix                      → adjacency matrix window        ║
║  5. Reset                       → empty graph, labels from A     ║
╚══════════════════════════════════════════════════════════════════╝
"""

# ═════════════════════════════════════════════════════════════════
#  IMPORTS
# ═════════════════════════════════════════════════════════════════
import logging
from tkinter import (
    Tk, Toplevel, Frame, Canvas, Label, Button, Listbox, Scrollbar,
    StringVar, IntVar, Scale, Radiobutton,
    LEFT, RIGHT, BOTTOM, BOTH, X, Y, END, VERTICAL, HORIZONTAL, W,
    messagebox, filedialog, colorchooser,
)

from controller import GraphController
from export import ExportError, PDFExporter, VideoExporter, export_png
from settings import THEMES, Settings

_LOGGER = logging.getLogger(__name__)

CANVAS_W, CANVAS_H = 800, 500

COLOR_LABELS = [
    ("NODE_DEFAULT",  "Unvisited"),
    ("NODE_IN_QUEUE", "In queue"),
    ("NODE_VISITING", "Visiting"),
    ("NODE_VISITED",  "Visited"),
    ("EDGE",          "Edges"),
    ("CANVAS_BG",     "Canvas"),
]


# ═════════════════════════════════════════════════════════════════
#  MATRIX WINDOW
# ═════════════════════════════════════════════════════════════════
class MatrixWindow(Toplevel):
    """
    Adjacency matrix shown as a label grid.

    Args:
        master   (Widget)                : Parent window.
        settings (Settings)              : Colour lookups.
        result   (AdjacencyMatrix | None): None shows the empty-graph note.
    """

    def __init__(self, master, settings, result):
        super().__init__(master)
        self.title("Adjacency Matrix")
        self.configure(bg=settings.get("BG"))
        s = settings
        bg, bg2, fg = s.get("BG"), s.get("BG2"), s.get("FG")

        if result is None:
            Label(self, text="The graph is empty.\nAdd nodes first.",
                  font=("Consolas", 12), bg=bg, fg=fg,
                  padx=30, pady=30).pack()
            return

        grid = Frame(self, bg=bg)
        grid.pack(padx=12, pady=12)
        cell = dict(font=("Consolas", 11), width=4, bd=1, relief="solid")

        Label(grid, text="", bg=bg2, fg=fg, **cell).grid(row=0, column=0)
        for j, label in enumerate(result.labels, start=1):
            Label(grid, text=label, bg=bg2, fg=s.get("ACCENT"),
                  **cell).grid(row=0, column=j)
        for i, (label, row) in enumerate(result.rows(), start=1):
            Label(grid, text=label, bg=bg2, fg=s.get("ACCENT"),
                  **cell).grid(row=i, column=0)
            for j, value in enumerate(row, start=1):
                Label(grid, text=str(value), bg=bg,
                      fg=s.get("GREEN_C") if value else fg,
                      **cell).grid(row=i, column=j)


# ═════════════════════════════════════════════════════════════════
#  SETTINGS DIALOG
# ═════════════════════════════════════════════════════════════════
class SettingsDialog(Toplevel):
    """
    Theme, animation-speed and colour preferences.

    Args:
        master      (Widget)   : Parent window.
        settings    (Settings) : Current settings object.
        on_apply_cb (callable) : Invoked with no arguments after Apply.
    """

    def __init__(self, master, settings, on_apply_cb):
        super().__init__(master)
        self.settings = settings
        self._cb      = on_apply_cb
        self._swatches = {}
        self._picked   = {}
        self._shown    = {}
        self.title("⚙ Settings")
        self.configure(bg=settings.get("BG"))
        self.resizable(False, False)
        self._build()

    def _build(self):
        s   = self.settings
        bg  = s.get("BG");  bg2 = s.get("BG2")
        fg  = s.get("FG");  accent = s.get("ACCENT")

        # ── Theme ──
        sec1 = Frame(self, bg=bg2, bd=1, relief="solid")
        sec1.pack(fill=X, padx=15, pady=8)
        Label(sec1, text="🎨 Theme", bg=bg2, fg=accent,
              font=("Consolas", 12, "bold")).pack(anchor=W, padx=8, pady=(6, 2))
        tf = Frame(sec1, bg=bg2)
        tf.pack(fill=X, padx=12, pady=6)
        self.theme_var = StringVar(value=s.theme)
        for t in ("dark", "light"):
            Radiobutton(tf, text=t.title(), variable=self.theme_var, value=t,
                        bg=bg2, fg=fg, selectcolor=bg,
                        font=("Consolas", 10), activebackground=bg2
                        ).pack(side=LEFT, padx=10)

        # ── Animation speed ──
        sec2 = Frame(self, bg=bg2, bd=1, relief="solid")
        sec2.pack(fill=X, padx=15, pady=5)
        Label(sec2, text="🎬 Step Interval", bg=bg2, fg=accent,
              font=("Consolas", 12, "bold")).pack(anchor=W, padx=8, pady=(6, 2))
        af = Frame(sec2, bg=bg2)
        af.pack(fill=X, padx=12, pady=6)
        self.speed_var = IntVar(value=s.anim_speed)
        Scale(af, from_=100, to=2500, orient=HORIZONTAL,
              variable=self.speed_var,
              bg=bg2, fg=fg, highlightthickness=0, troughcolor=bg,
              length=200, font=("Consolas", 9)).pack(side=LEFT)
        Label(af, text="ms", bg=bg2, fg=fg,
              font=("Consolas", 10)).pack(side=LEFT, padx=4)

        # ── Node / canvas colours ──
        sec3 = Frame(self, bg=bg2, bd=1, relief="solid")
        sec3.pack(fill=X, padx=15, pady=5)
        Label(sec3, text="🖌 Colors", bg=bg2, fg=accent,
              font=("Consolas", 12, "bold")).pack(anchor=W, padx=8, pady=(6, 2))
        for key, label in COLOR_LABELS:
            row = Frame(sec3, bg=bg2)
            row.pack(fill=X, padx=12, pady=2)
            Label(row, text=label, bg=bg2, fg=fg, font=("Consolas", 9),
                  width=14, anchor=W).pack(side=LEFT)
            swatch = Button(row, text="  ", width=3, bd=1, cursor="hand2",
                            command=lambda k=key: self._pick(k))
            swatch.pack(side=LEFT, padx=4)
            hex_lbl = Label(row, bg=bg2, fg=fg, font=("Consolas", 9))
            hex_lbl.pack(side=LEFT, padx=2)
            self._swatches[key] = (swatch, hex_lbl)
            self._show_color(key, s.get(key))
        Button(sec3, text="🔄 Reset Colors", bg=s.get("BTN_BG"), fg=fg,
               font=("Consolas", 10), bd=0, cursor="hand2",
               command=self._reset_colors).pack(pady=6)

        bf = Frame(self, bg=bg)
        bf.pack(fill=X, padx=15, pady=(12, 8))
        Button(bf, text="✅ Apply", bg=s.get("GREEN_C"), fg="#11111b",
               font=("Consolas", 12, "bold"), bd=0, cursor="hand2",
               width=12, command=self._apply).pack(side=LEFT, padx=4)
        Button(bf, text="❌ Cancel", bg=s.get("RED_C"), fg="#11111b",
               font=("Consolas", 12, "bold"), bd=0, cursor="hand2",
               width=12, command=self.destroy).pack(side=RIGHT, padx=4)

    # ── Colour picker ──
    def _show_color(self, key, value):
        self._shown[key] = value
        swatch, hex_lbl = self._swatches[key]
        swatch.configure(bg=value, activebackground=value)
        hex_lbl.configure(text=value)

    def _pick(self, key):
        _, hexc = colorchooser.askcolor(initialcolor=self._shown[key],
                                        title=f"Pick {key}", parent=self)
        if hexc:
            self._picked[key] = hexc
            self._show_color(key, hexc)

    def _reset_colors(self):
        """Show theme colours again; nothing is stored until Apply."""
        self._picked = {key: None for key, _ in COLOR_LABELS}
        theme = self.theme_var.get()
        for key, _ in COLOR_LABELS:
            self._show_color(key, THEMES[theme][key])

    def _apply(self):
        self.settings.theme      = self.theme_var.get()
        self.settings.anim_speed = self.speed_var.get()
        # set_color after the theme so a pick equal to the new theme's
        # value clears the override instead of pinning it
        for key, value in self._picked.items():
            self.settings.set_color(key, value)
        self.settings.save()
        self._cb()
        self.destroy()


# ═════════════════════════════════════════════════════════════════
#  TRAVERSAL WINDOW
# ═════════════════════════════════════════════════════════════════
class TraversalWindow(Toplevel):
    """Main window: drawing canvas, algorithm buttons, stats and step log.

    Attributes:
        settings   (Settings)        : Persisted preferences.
        controller (GraphController) : Graph + animation owner; its
                                       player ticks through ``self.after``.

    Widget references (set in ``_build_ui``):
        canvas, status_label, stats_labels, log_list, algo_buttons
    """

    def __init__(self, master, settings):
        super().__init__(master)
        self.settings = settings
        self.title("Graph Traversal Visualizer — BFS / DFS  v1.0")
        self.geometry("1180x680")
        self.minsize(1000, 620)

        self.controller = GraphController(
            schedule=self.after, cancel=self.after_cancel,
            interval_ms=settings.anim_speed,
            on_change=self._redraw, on_status=self._set_status,
            on_finish=self._on_finish)
        self._logged_steps = None
        self._matrix_win = None

        self._build_ui()
        self._apply_theme()
        self._redraw()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _on_close(self):
        """Cancel a pending animation tick before the window goes away."""
        self.controller.player.stop()
        self.destroy()

    # ═══════════════════════════════════════════════════════════════
    #  BUILD UI
    #    1. top    — title + Settings / export buttons
    #    2. ctrl   — BFS / DFS / Matrix / Reset
    #    3. body   — canvas (left) + stats & step log (right)
    #    4. status — one-line status bar
    # ═══════════════════════════════════════════════════════════════
    def _build_ui(self):
        s = self.settings
        self._themed = []       # (widget, bg key, fg key | None)

        top = Frame(self)
        top.pack(fill=X, padx=8, pady=6)
        self._themed.append((top, "BG2", None))
        title = Label(top, text="🕸 Graph Traversal Visualizer",
                      font=("Consolas", 14, "bold"))
        title.pack(side=LEFT, padx=10)
        self._themed.append((title, "BG2", "ACCENT"))
        for txt, cmd in [("⚙ Settings", self._open_settings),
                         ("🎞 MP4", self._export_video),
                         ("📄 PDF", self._export_pdf),
                         ("🖼 PNG", self._export_png)]:
            b = Button(top, text=txt, font=("Consolas", 10, "bold"),
                       bd=0, cursor="hand2", padx=10, command=cmd)
            b.pack(side=RIGHT, padx=4)
            self._themed.append((b, "BTN_BG", "FG"))

        ctrl = Frame(self)
        ctrl.pack(fill=X, padx=8, pady=4)
        self._themed.append((ctrl, "BG", None))
        self.algo_buttons = {}
        for kind, txt in [("bfs", "▶ BFS"), ("dfs", "▶ DFS")]:
            b = Button(ctrl, text=txt, font=("Consolas", 11, "bold"),
                       bd=0, cursor="hand2", padx=12,
                       command=lambda k=kind: self._select_algorithm(k))
            b.pack(side=LEFT, padx=4)
            self.algo_buttons[kind] = b
            self._themed.append((b, "ACCENT", None))
        b = Button(ctrl, text="▦ Matrix", font=("Consolas", 11, "bold"),
                   bd=0, cursor="hand2", padx=12, command=self._show_matrix)
        b.pack(side=LEFT, padx=4)
        self._themed.append((b, "GREEN_C", None))
        b = Button(ctrl, text="🗑 Reset", font=("Consolas", 11, "bold"),
                   bd=0, cursor="hand2", padx=12, command=self._reset)
        b.pack(side=LEFT, padx=4)
        self._themed.append((b, "RED_C", None))

        body = Frame(self)
        body.pack(fill=BOTH, expand=True, padx=8, pady=4)
        self._themed.append((body, "BG", None))

        self.canvas = Canvas(body, width=CANVAS_W, height=CANVAS_H,
                             highlightthickness=1)
        self.canvas.pack(side=LEFT, padx=(0, 4))
        self.canvas.bind("<Button-1>", self._on_canvas_click)

        right = Frame(body, width=300, bd=1, relief="solid")
        right.pack(side=RIGHT, fill=Y)
        right.pack_propagate(False)
        self._themed.append((right, "STATS_BG", None))

        hdr = Label(right, text="📊 Stats", font=("Consolas", 11, "bold"))
        hdr.pack(fill=X, padx=6, pady=(6, 2))
        self._themed.append((hdr, "STATS_BG", "ACCENT"))
        self.stats_labels = {}
        for key, name in [("nodes", "Nodes"), ("edges", "Edges"),
                          ("step", "Step")]:
            row = Frame(right)
            row.pack(fill=X, padx=10, pady=1)
            self._themed.append((row, "STATS_BG", None))
            lb = Label(row, text=f"{name}:", font=("Consolas", 10), anchor=W)
            lb.pack(side=LEFT)
            val = Label(row, text="0", font=("Consolas", 10, "bold"))
            val.pack(side=RIGHT)
            self._themed.append((lb, "STATS_BG", "STATS_FG"))
            self._themed.append((val, "STATS_BG", "FG"))
            self.stats_labels[key] = val

        hdr = Label(right, text="📝 Steps", font=("Consolas", 11, "bold"))
        hdr.pack(fill=X, padx=6, pady=(10, 2))
        self._themed.append((hdr, "STATS_BG", "ACCENT"))
        lf = Frame(right)
        lf.pack(fill=BOTH, expand=True, padx=6, pady=(0, 6))
        sb = Scrollbar(lf, orient=VERTICAL)
        self.log_list = Listbox(lf, font=("Consolas", 10), activestyle="none",
                                yscrollcommand=sb.set)
        sb.config(command=self.log_list.yview)
        sb.pack(side=RIGHT, fill=Y)
        self.log_list.pack(side=LEFT, fill=BOTH, expand=True)

        self.status_label = Label(self, text="Click the canvas to add a node.",
                                  font=("Consolas", 10), anchor=W)
        self.status_label.pack(side=BOTTOM, fill=X, padx=8, pady=(0, 6))
        self._themed.append((self.status_label, "BG2", "FG"))

    def _apply_theme(self):
        s = self.settings
        self.configure(bg=s.get("BG"))
        for widget, bg_key, fg_key in self._themed:
            widget.configure(bg=s.get(bg_key))
            if fg_key:
                widget.configure(fg=s.get(fg_key))
            elif isinstance(widget, Button):
                widget.configure(fg="#11111b")
        self.canvas.configure(bg=s.get("CANVAS_BG"),
                              highlightbackground=s.get("BG2"))
        self.log_list.configure(bg=s.get("BG"), fg=s.get("FG"),
                                selectbackground=s.get("ACCENT"))

    # ═══════════════════════════════════════════════════════════════
    #  EVENTS
    # ═══════════════════════════════════════════════════════════════
    def _on_canvas_click(self, event):
        self.controller.handle_click(event.x, event.y)
        if self.controller.is_animating:
            self._fill_log()
        self.canvas.configure(
            cursor="hand2" if self.controller.selected_algorithm else "")
        self._redraw()

    def _select_algorithm(self, kind):
        if self.controller.select_algorithm(kind):
            self.canvas.configure(cursor="hand2")

    def _reset(self):
        self.controller.reset()
        self.canvas.configure(cursor="")
        self.log_list.delete(0, END)
        self._logged_steps = None
        self._close_matrix()
        self._redraw()

    def _show_matrix(self):
        result = self.controller.show_matrix()
        if result is False:
            return
        self._close_matrix()
        self._matrix_win = MatrixWindow(self, self.settings, result)

    def _close_matrix(self):
        if self._matrix_win is not None and self._matrix_win.winfo_exists():
            self._matrix_win.destroy()
        self._matrix_win = None

    def _on_finish(self):
        self.stats_labels["step"].config(text="done")

    def _set_status(self, msg):
        self.status_label.config(text=msg)

    def _open_settings(self):
        def on_apply():
            self.controller.player.interval_ms = self.settings.anim_speed
            self._apply_theme()
            self._redraw()
        SettingsDialog(self, self.settings, on_apply)

    # ═══════════════════════════════════════════════════════════════
    #  DRAWING
    # ═══════════════════════════════════════════════════════════════
    def _fill_log(self):
        steps = self.controller.last_steps
        if steps is self._logged_steps:
            return
        self._logged_steps = steps
        self.log_list.delete(0, END)
        for i, st in enumerate(steps, 1):
            self.log_list.insert(END, f"{i:>3}. {st.id:<4} {st.state}")

    def _redraw(self):
        """Edges first, then nodes on top, then stats and log cursor."""
        s = self.settings
        c = self.canvas
        g = self.controller.graph
        c.delete("all")

        for edge in g.edges:
            a, b = g.get_node(edge.source), g.get_node(edge.target)
            c.create_line(a.x, a.y, b.x, b.y, fill=s.get("EDGE"), width=2)

        selected = self.controller.selected_node
        for node in g.nodes:
            r = node.radius
            ring = selected is not None and node.id == selected.id
            c.create_oval(node.x - r, node.y - r, node.x + r, node.y + r,
                          fill=s.state_color(node.state),
                          outline=s.get("YELLOW_C") if ring else s.get("NODE_OUTLINE"),
                          width=4 if ring else 2)
            c.create_text(node.x, node.y, text=node.id,
                          fill=s.get("NODE_TEXT"), font=("Arial", 12, "bold"))

        stats = self.controller.stats()
        self.stats_labels["nodes"].config(text=str(stats["nodes"]))
        self.stats_labels["edges"].config(text=str(stats["edges"]))

        player = self.controller.player
        if player.is_animating:
            self.stats_labels["step"].config(
                text=f"{player.cursor} / {len(player.steps)}")
            if player.cursor:
                self.log_list.selection_clear(0, END)
                self.log_list.selection_set(player.cursor - 1)
                self.log_list.see(player.cursor - 1)
        elif not g.nodes:
            self.stats_labels["step"].config(text="0")

    # ═══════════════════════════════════════════════════════════════
    #  EXPORT
    # ═══════════════════════════════════════════════════════════════
    def _run_export(self, title, fn):
        try:
            fn()
        except ExportError as e:
            _LOGGER.warning("%s export failed: %s", title, e)
            messagebox.showerror(f"{title} Error", str(e), parent=self)
        else:
            messagebox.showinfo("Export", f"{title} saved.", parent=self)

    def _export_png(self):
        fn = filedialog.asksaveasfilename(parent=self, defaultextension=".png",
                                          filetypes=[("PNG", "*.png")])
        if not fn:
            return
        sel = self.controller.selected_node
        self._run_export("PNG", lambda: export_png(
            self.settings, self.controller.graph, fn,
            selected=sel.id if sel else None))

    def _export_pdf(self):
        if not self.controller.last_steps:
            messagebox.showinfo("Info", "Run a traversal first.", parent=self)
            return
        fn = filedialog.asksaveasfilename(parent=self, defaultextension=".pdf",
                                          filetypes=[("PDF", "*.pdf")])
        if not fn:
            return
        self._run_export("PDF", lambda: PDFExporter(self.settings).export(
            self.controller.graph, self.controller.last_steps, fn,
            algorithm=self.controller.last_kind or ""))

    def _export_video(self):
        if not self.controller.last_steps:
            messagebox.showinfo("Info", "Run a traversal first.", parent=self)
            return
        fn = filedialog.asksaveasfilename(parent=self, defaultextension=".mp4",
                                          filetypes=[("MP4", "*.mp4")])
        if not fn:
            return
        self._run_export("Video", lambda: VideoExporter(self.settings).export(
            self.controller.graph, self.controller.last_steps, fn))


# ═════════════════════════════════════════════════════════════════
#  ENTRY POINT
# ═════════════════════════════════════════════════════════════════
def open_visualizer(root=None, settings=None):
    """
    Launch the visualizer window.

    Args:
        root     (Tk | None)      : Master window; a hidden one is
                                    created when None.
        settings (Settings | None): Loaded from disk when None.
    """
    settings = settings or Settings()
    if root is None:
        root = Tk()
        root.withdraw()

    win = TraversalWindow(root, settings)
    win.protocol("WM_DELETE_WINDOW",
                 lambda: (win._on_close(), root.destroy()))
    if root.winfo_exists():
        root.mainloop()
