"""
Coordinate picker - pick a region on a PDF page or image and copy its coordinates.
"""

import asyncio
import logging
import os

import flet as ft

from flet_coord_picker import CoordPicker, OriginMode, format_region, load_document
from flet_coord_picker.backends.pymupdf import PyMuPDFBackend

logging.basicConfig(
    level=os.environ.get("FLET_COORD_PICKER_LOG", "WARNING").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("example")

COLORS = {
    "bg": "#f5f5f5",
    "surface": "#ffffff",
    "border": "#e5e5e5",
    "text": "#171717",
    "text_muted": "#737373",
    "accent": "#007bff",
    "success": "#28a745",
    "error": "#dc3545",
}

ORIGIN_LABELS = [
    (OriginMode.TOP_LEFT, "Top left"),
    (OriginMode.BOTTOM_LEFT, "Bottom left (PDF)"),
    (OriginMode.TOP_RIGHT, "Top right"),
    (OriginMode.BOTTOM_RIGHT, "Bottom right"),
]

EXTENSIONS = ["pdf", "png", "jpg", "jpeg", "gif", "bmp", "tif", "tiff", "svg"]


def main(page: ft.Page):
    page.title = "Coordinate Picker"
    page.padding = 0
    page.bgcolor = COLORS["bg"]
    page.theme_mode = ft.ThemeMode.LIGHT

    status = ft.Text("Open a PDF or image to start", color=COLORS["text_muted"])
    pointer_text = ft.Text("x: -, y: -", size=13, color=COLORS["text_muted"])
    page_text = ft.Text("", size=13, color=COLORS["text"])

    selection_label = ft.Text("", size=13, color="#ffffff", weight=ft.FontWeight.W_500)
    selection_chip = ft.Container(
        content=selection_label,
        bgcolor=COLORS["accent"],
        border_radius=6,
        padding=ft.padding.symmetric(horizontal=10, vertical=6),
        tooltip="Click to copy",
        visible=False,
    )

    def refresh_page_controls():
        count = picker.page_count
        page_text.value = f"{picker.current_page + 1} / {count}" if count else ""
        prev_btn.disabled = picker.current_page <= 0
        next_btn.disabled = picker.current_page >= count - 1
        prev_btn.visible = next_btn.visible = count > 1
        page.update()

    def on_selection_change(region):
        selection_label.value = format_region(region)
        selection_chip.visible = region is not None
        if selection_chip.page:
            selection_chip.update()

    def on_pointer_move(x, y):
        pointer_text.value = f"x: {x}, y: {y}"
        if pointer_text.page:
            pointer_text.update()

    picker = CoordPicker(
        on_page_change=lambda _: refresh_page_controls(),
        on_selection_change=on_selection_change,
        on_pointer_move=on_pointer_move,
    )

    async def on_selection_click(e):
        if not picker.copy_selection():
            return
        readout = selection_label.value
        selection_chip.bgcolor = COLORS["success"]
        selection_label.value = "Copied!"
        selection_chip.update()
        await asyncio.sleep(0.5)
        selection_chip.bgcolor = COLORS["accent"]
        selection_label.value = readout
        selection_chip.update()

    selection_chip.on_click = on_selection_click

    async def on_file_picked(e: ft.FilePickerResultEvent):
        if not e.files:
            return
        picked = e.files[0]
        if not PyMuPDFBackend.is_supported(picked.name):
            status.value = f"Unsupported file type: {picked.name}"
            status.color = COLORS["error"]
            page.update()
            return

        status.value = "Loading..."
        status.color = COLORS["text_muted"]
        page.update()

        result = await load_document(picked.path, scale=picker.scale)
        if not result.ok:
            status.value = f"Failed to load: {result.error}"
            status.color = COLORS["error"]
            page.update()
            return

        if picker.source:
            picker.source.close()
        picker.source = result.backend
        status.value = picked.name
        status.color = COLORS["text"]
        refresh_page_controls()

    file_picker = ft.FilePicker(on_result=on_file_picked)
    page.overlay.append(file_picker)

    def on_origin_change(e):
        picker.origin = e.control.value

    origin_dropdown = ft.Dropdown(
        value=OriginMode.TOP_LEFT.value,
        options=[ft.dropdown.Option(key=m.value, text=label) for m, label in ORIGIN_LABELS],
        on_change=on_origin_change,
        width=200,
        dense=True,
    )

    prev_btn = ft.IconButton(
        icon=ft.Icons.CHEVRON_LEFT,
        on_click=lambda e: picker.previous_page(),
        visible=False,
    )
    next_btn = ft.IconButton(
        icon=ft.Icons.CHEVRON_RIGHT,
        on_click=lambda e: picker.next_page(),
        visible=False,
    )

    def on_keyboard(e: ft.KeyboardEvent):
        if e.key in ("Arrow Left", "Arrow Up"):
            picker.previous_page()
        elif e.key in ("Arrow Right", "Arrow Down"):
            picker.next_page()

    page.on_keyboard_event = on_keyboard

    toolbar = ft.Container(
        content=ft.Row(
            [
                ft.FilledButton(
                    "Open file",
                    icon=ft.Icons.FOLDER_OPEN,
                    on_click=lambda e: file_picker.pick_files(
                        allowed_extensions=EXTENSIONS
                    ),
                ),
                origin_dropdown,
                prev_btn,
                page_text,
                next_btn,
                ft.IconButton(
                    icon=ft.Icons.ZOOM_OUT, on_click=lambda e: picker.zoom_out()
                ),
                ft.IconButton(
                    icon=ft.Icons.ZOOM_IN, on_click=lambda e: picker.zoom_in()
                ),
                ft.Container(expand=True),
                pointer_text,
                selection_chip,
            ],
            spacing=8,
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        bgcolor=COLORS["surface"],
        border=ft.border.only(bottom=ft.BorderSide(1, COLORS["border"])),
        padding=ft.padding.symmetric(horizontal=16, vertical=8),
    )

    page.add(
        ft.Column(
            [
                toolbar,
                ft.Container(content=status, padding=ft.padding.only(left=16)),
                ft.Container(
                    content=ft.Column(
                        [ft.Row([picker.control], scroll=ft.ScrollMode.AUTO)],
                        scroll=ft.ScrollMode.AUTO,
                        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    ),
                    expand=True,
                    padding=16,
                    alignment=ft.alignment.top_center,
                ),
            ],
            expand=True,
            spacing=0,
        )
    )


if __name__ == "__main__":
    ft.app(target=main)
