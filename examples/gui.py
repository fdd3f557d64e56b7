from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

import random

from cg2d.io import parse_xyz_text, write_ply
from cg2d.mesh import Delaunay2D
from cg2d.pipeline import triangulate_points

import matplotlib
matplotlib.use("TkAgg")
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  # потрібен для 'projection="3d"'


def generate_random_points(n: int):
    """
    n випадкових точок у квадраті [0,1]^2 з висотою-«пагорбом» + кути квадрата,
    щоб оболонка була прямокутною.
    """
    pts = [(0, 0, 0.0), (1, 0, 0.0), (1, 1, 0.0), (0, 1, 0.0)]
    for _ in range(n):
        x = random.random()
        y = random.random()
        z = 1.0 - ((x - 0.5) ** 2 + (y - 0.5) ** 2) * 2.0
        pts.append((x, y, z))
    return pts


class TinApp(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("cg2d — TIN viewer")
        self.geometry("800x650")
        self._build_widgets()

    def _build_widgets(self):
        main = ttk.Frame(self, padding=10)
        main.pack(fill="both", expand=True)

        # --- Режим вводу ---
        mode_frame = ttk.LabelFrame(main, text="Режим вводу точок")
        mode_frame.pack(fill="x", pady=5)
        self.input_mode = tk.StringVar(value="random")
        ttk.Radiobutton(mode_frame, text="Випадкові точки", variable=self.input_mode,
                        value="random", command=self._update_mode_state).grid(row=0, column=0, sticky="w", padx=5)
        ttk.Radiobutton(mode_frame, text="Ручне введення точок", variable=self.input_mode,
                        value="manual", command=self._update_mode_state).grid(row=0, column=1, sticky="w", padx=5)

        params = ttk.LabelFrame(main, text="Параметри")
        params.pack(fill="x", pady=5)
        ttk.Label(params, text="Кількість випадкових точок:").grid(row=0, column=0, sticky="w", padx=5, pady=5)
        self.n_entry = ttk.Entry(params, width=10)
        self.n_entry.insert(0, "50")
        self.n_entry.grid(row=0, column=1, sticky="w", padx=5, pady=5)
        ttk.Label(params, text="Backend:").grid(row=0, column=2, sticky="w", padx=5, pady=5)
        self.backend = tk.StringVar(value="internal")
        ttk.Combobox(params, textvariable=self.backend, values=("internal", "scipy"),
                     width=10, state="readonly").grid(row=0, column=3, sticky="w", padx=5, pady=5)

        manual_frame = ttk.LabelFrame(main, text="Ручне введення точок (одна точка - один рядок)")
        manual_frame.pack(fill="both", expand=True, pady=5)
        self.points_text = tk.Text(manual_frame, height=6, wrap="none")
        self.points_text.pack(fill="both", expand=True, padx=5, pady=5)
        self.points_text.insert("1.0", "# Приклад:\n# 0 0 0\n# 1 0 0\n# 1 1 1\n# 0 1 0\n")

        ttk.Button(main, text="Запустити тріангуляцію", command=self.run_pipeline).pack(fill="x", pady=10)

        result_frame = ttk.LabelFrame(main, text="Результати")
        result_frame.pack(fill="x", pady=5)
        self.vertices_var = tk.StringVar(value="—")
        self.tris_var = tk.StringVar(value="—")
        self.valid_var = tk.StringVar(value="—")
        for row, (label, var) in enumerate((("Вершини:", self.vertices_var),
                                            ("Трикутників:", self.tris_var),
                                            ("Валідація:", self.valid_var))):
            ttk.Label(result_frame, text=label).grid(row=row, column=0, sticky="w", padx=5, pady=2)
            ttk.Label(result_frame, textvariable=var).grid(row=row, column=1, sticky="w", padx=5, pady=2)

        plot_frame = ttk.LabelFrame(main, text="3D візуалізація")
        plot_frame.pack(fill="both", expand=True, pady=5)
        self.fig = Figure(figsize=(4, 3))
        self.ax = self.fig.add_subplot(111, projection="3d")
        self.canvas = FigureCanvasTkAgg(self.fig, master=plot_frame)
        self.canvas.draw()
        self.canvas.get_tk_widget().pack(fill="both", expand=True)

        self._update_mode_state()

    def _update_mode_state(self):
        self.n_entry.configure(state="normal" if self.input_mode.get() == "random" else "disabled")

    def update_plot(self, pts, tris):
        self.ax.clear()
        if not tris:
            self.ax.set_title("Немає трикутників")
            self.canvas.draw()
            return
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        zs = [p.z for p in pts]
        self.ax.plot_trisurf(xs, ys, zs, triangles=tris, cmap="terrain", linewidth=0.2, edgecolor="k")
        self.ax.set_xlabel("X")
        self.ax.set_ylabel("Y")
        self.ax.set_zlabel("Z")
        self.ax.set_title("Delaunay TIN")
        self.canvas.draw()

    def run_pipeline(self):
        if self.input_mode.get() == "random":
            try:
                n = int(self.n_entry.get())
                if n < 0:
                    raise ValueError
            except ValueError:
                messagebox.showerror("Помилка", "Кількість точок має бути невід’ємним цілим числом.")
                return
            points = generate_random_points(n)
        else:
            try:
                points = parse_xyz_text(self.points_text.get("1.0", "end"))
            except ValueError as e:
                messagebox.showerror("Помилка парсингу точок", str(e))
                return

        try:
            pts, tri = triangulate_points(points, backend=self.backend.get(), dedupe=True)
            tris = list(tri)
            d2 = Delaunay2D(pts)
            d2.build()
            d2.remove_super_triangle()
            report = d2.mesh.validate()
            write_ply("mesh.ply", pts, tris)
            self.update_plot(pts, tris)
        except (ValueError, RuntimeError) as e:
            messagebox.showerror("Помилка виконання", str(e))
            return

        self.vertices_var.set(str(len(pts)))
        self.tris_var.set(str(len(tris)))
        ok = not (report["bad_orientation"] or report["bad_edge_multiplicity"])
        self.valid_var.set("OK" if ok else "Є проблеми (див. консоль)")
        print("VALIDATION:", report)
        messagebox.showinfo("Готово", "Тріангуляція завершена.\nЗаписано файл mesh.ply")


if __name__ == "__main__":
    app = TinApp()
    app.mainloop()
