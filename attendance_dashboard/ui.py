import logging
from datetime import datetime

import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from PIL import ImageTk

from attendance_dashboard.avatars import AvatarCache
from attendance_dashboard.constants import (
    APP_NAME,
    APP_VERSION,
    CACHE_FILE,
    POLL_INTERVAL_MS,
    REFRESH_INDICATOR_MS,
    WINDOW_WIDTH,
    WINDOW_HEIGHT,
    DEFAULT_FONT,
    TITLE_FONT,
    COUNT_FONT,
)
from attendance_dashboard.controller import DashboardController
from attendance_dashboard.export import default_filename
from attendance_dashboard.fetcher import SheetFetcher, BackgroundFetcher
from attendance_dashboard.notifications import NotificationCenter
from attendance_dashboard.storage import LocalCache

logger = logging.getLogger(__name__)

TOAST_COLORS = {
    "info": "#3498db",
    "success": "#27ae60",
    "warning": "#f39c12",
    "error": "#e74c3c",
}


class AttendanceDashboard:
    def __init__(self, master, fetcher=None, cache=None):
        self.master = master
        master.title(f"{APP_NAME} v{APP_VERSION}")
        master.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        master.configure(bg="white")
        master.option_add("*Font", "Arial 10")

        self.notifications = NotificationCenter(schedule=master.after)
        self.notifications.subscribe(self.show_notifications)

        runner = BackgroundFetcher(
            fetcher or SheetFetcher(),
            post=lambda callback, *args: self.master.after(0, callback, *args)
        )
        self.controller = DashboardController(
            runner=runner,
            cache=cache or LocalCache(CACHE_FILE),
            notifications=self.notifications,
            view=self
        )
        self.avatars = AvatarCache(ImageTk.PhotoImage)

        title_label = tk.Label(
            master, text=APP_NAME, font=TITLE_FONT,
            fg="#2c3e50", bg="white", pady=10
        )
        title_label.pack(side="top")

        self.create_summary_bar()
        self.create_toolbar()
        self.create_table()
        self.create_notification_area()

        self.refresh()
        self.master.after(POLL_INTERVAL_MS, self.poll)

    def create_summary_bar(self):
        summary = tk.Frame(self.master, bg="white")
        summary.pack(fill="x", padx=15)

        self.present_label = tk.Label(summary, text="Present: 0", font=COUNT_FONT, fg="#27ae60", bg="white")
        self.present_label.pack(side="left", padx=8)

        self.absent_label = tk.Label(summary, text="Absent: 0", font=COUNT_FONT, fg="#e74c3c", bg="white")
        self.absent_label.pack(side="left", padx=8)

        self.status_label = tk.Label(summary, text="● Online", font=DEFAULT_FONT, fg="#27ae60", bg="white")
        self.status_label.pack(side="right", padx=8)

        self.last_sync_label = tk.Label(summary, text=self.controller.state.last_sync,
                                        font=DEFAULT_FONT, fg="#7f8c8d", bg="white")
        self.last_sync_label.pack(side="right", padx=8)

    def create_toolbar(self):
        toolbar = tk.Frame(self.master, bg="white")
        toolbar.pack(fill="x", padx=15, pady=8)

        tk.Label(toolbar, text="Search:", font=("Arial", 11), fg="#2c3e50", bg="white").pack(side="left")

        self.search_var = tk.StringVar()
        self.search_var.trace_add("write", lambda *args: self.controller.search(self.search_var.get()))
        tk.Entry(
            toolbar, textvariable=self.search_var, font=("Arial", 11),
            bg="#ecf0f1", fg="#2c3e50", width=28
        ).pack(side="left", padx=5)

        button_style = {"font": ("Arial", 10), "relief": "raised", "bd": 1, "padx": 8, "pady": 3, "fg": "white"}

        tk.Button(toolbar, text="Delete 🗑", **button_style, bg="#e74c3c",
                  command=self.delete_selected).pack(side="right", padx=3)
        tk.Button(toolbar, text="Edit ✏", **button_style, bg="#8e44ad",
                  command=self.edit_selected).pack(side="right", padx=3)
        tk.Button(toolbar, text="Export Excel 📊", **button_style, bg="#16a085",
                  command=lambda: self.export("xlsx")).pack(side="right", padx=3)
        tk.Button(toolbar, text="Export CSV 💾", **button_style, bg="#d35400",
                  command=lambda: self.export("csv")).pack(side="right", padx=3)

        self.refresh_btn = tk.Button(toolbar, text="Refresh 🔄", **button_style, bg="#3498db",
                                     command=self.manual_refresh)
        self.refresh_btn.pack(side="right", padx=3)

    def create_table(self):
        tree_frame = tk.Frame(self.master, bg="white")
        tree_frame.pack(fill="both", expand=True, padx=15, pady=5)

        self.records_tree = ttk.Treeview(
            tree_frame,
            columns=("uid", "contact", "status"),
            show="tree headings",
            height=15
        )
        self.records_tree.heading("#0", text="Name", anchor="w")
        self.records_tree.heading("uid", text="UID", anchor="center")
        self.records_tree.heading("contact", text="Contact", anchor="center")
        self.records_tree.heading("status", text="Attendance", anchor="center")

        self.records_tree.column("#0", width=260, anchor="w")
        self.records_tree.column("uid", width=120, anchor="center")
        self.records_tree.column("contact", width=180, anchor="center")
        self.records_tree.column("status", width=120, anchor="center")

        self.records_tree.tag_configure("present", foreground="#27ae60")
        self.records_tree.tag_configure("absent", foreground="#e74c3c")

        style = ttk.Style(self.master)
        style.configure("Treeview", rowheight=32)

        tree_scrollbar = ttk.Scrollbar(tree_frame, orient="vertical", command=self.records_tree.yview)
        self.records_tree.configure(yscrollcommand=tree_scrollbar.set)

        self.records_tree.pack(side="left", fill="both", expand=True)
        tree_scrollbar.pack(side="right", fill="y")

        self.records_tree.bind("<Double-Button-1>", lambda event: self.edit_selected())
        self.records_tree.bind("<Delete>", lambda event: self.delete_selected())

    def create_notification_area(self):
        self.toast_frame = tk.Frame(self.master, bg="white")
        self.toast_frame.place(relx=0.99, rely=0.99, anchor="se")
        self.toast_widgets = {}

    # ==================================================
    # View callbacks
    # ==================================================

    def render(self, rows, present, absent):
        self.present_label.config(text=f"Present: {present}")
        self.absent_label.config(text=f"Absent: {absent}")

        for item in self.records_tree.get_children():
            self.records_tree.delete(item)

        for row in rows:
            # iid is not the uid, duplicated uids are allowed
            self.records_tree.insert(
                "", "end",
                text=f"  {row.name}",
                image=self.avatars.get(row.avatar_key),
                values=(row.uid, row.contact, row.status_label),
                tags=(row.attendance,)
            )

    def show_status(self, online):
        if online:
            self.status_label.config(text="● Online", fg="#27ae60")
        else:
            self.status_label.config(text="● Offline", fg="#e74c3c")

    def show_last_sync(self, text):
        self.last_sync_label.config(text=text)

    def show_notifications(self, active):
        current = {n.id for n in active}
        for notification_id in list(self.toast_widgets):
            if notification_id not in current:
                self.toast_widgets.pop(notification_id).destroy()

        for n in active:
            toast = self.toast_widgets.get(n.id)
            if toast is None:
                toast = self._make_toast(n)
                self.toast_widgets[n.id] = toast
            if not n.visible:
                for child in toast.winfo_children():
                    child.config(fg="#bdc3c7")

    def _make_toast(self, notification):
        color = TOAST_COLORS.get(notification.severity, TOAST_COLORS["info"])
        toast = tk.Frame(self.toast_frame, bg=color, padx=6, pady=4)
        toast.pack(side="top", fill="x", pady=2)

        tk.Label(toast, text=f"{notification.icon} {notification.message}",
                 bg=color, fg="white", font=DEFAULT_FONT).pack(side="left")
        tk.Button(toast, text="×", bg=color, fg="white", relief="flat", bd=0,
                  command=lambda: self.notifications.dismiss(notification.id)).pack(side="right", padx=4)
        return toast

    # ==================================================
    # Actions
    # ==================================================

    def poll(self):
        self.refresh()
        self.master.after(POLL_INTERVAL_MS, self.poll)

    def refresh(self):
        self.controller.refresh()

    def manual_refresh(self):
        self.refresh_btn.config(text="Refreshing...", state="disabled")
        self.refresh()
        self.master.after(
            REFRESH_INDICATOR_MS,
            lambda: self.refresh_btn.config(text="Refresh 🔄", state="normal")
        )

    def selected_uid(self):
        selection = self.records_tree.selection()
        if not selection:
            messagebox.showwarning("⚠️ Warning", "Please select a student first.")
            return None
        return self.records_tree.item(selection[0], "values")[0]

    def edit_selected(self):
        uid = self.selected_uid()
        if uid is not None:
            self.controller.edit_record(uid)

    def delete_selected(self):
        uid = self.selected_uid()
        if uid is None:
            return
        if messagebox.askyesno("❓ Confirm", "Are you sure you want to delete this student?"):
            self.controller.delete_record(uid)

    def export(self, fmt):
        if not self.controller.records:
            self.controller.export(fmt=fmt)
            return

        today = datetime.now().date()
        path = filedialog.asksaveasfilename(
            defaultextension=f".{fmt}",
            initialfile=default_filename(fmt, today),
            filetypes=[("CSV", "*.csv")] if fmt == "csv" else [("Excel", "*.xlsx")]
        )
        if path:
            self.controller.export(path, fmt)


def run_app():
    root = tk.Tk()
    app = AttendanceDashboard(root)
    root.mainloop()
    return app
