"""
Minimal coordinate picker example.
For a complete demo check example.py
"""

import sys

import flet as ft

from flet_coord_picker import CoordDocument, CoordPicker, OriginMode, format_region


def main(page: ft.Page):
    page.vertical_alignment = ft.MainAxisAlignment.CENTER
    page.horizontal_alignment = ft.CrossAxisAlignment.CENTER
    page.title = "Coordinate Picker"
    page.padding = 0

    path = sys.argv[1] if len(sys.argv) > 1 else "sample.pdf"
    document = CoordDocument(path)

    readout = ft.Text("Drag on the page to select a region")

    def on_selection_change(region):
        readout.value = format_region(region) or "No selection"
        readout.update()

    picker = CoordPicker(
        document,
        origin=OriginMode.BOTTOM_LEFT,
        on_selection_change=on_selection_change,
    )

    page.add(
        ft.Column(
            [
                readout,
                picker.control,
                ft.Row(
                    [
                        ft.IconButton(
                            icon=ft.Icons.CHEVRON_LEFT,
                            on_click=lambda e: picker.previous_page(),
                        ),
                        ft.IconButton(
                            icon=ft.Icons.CHEVRON_RIGHT,
                            on_click=lambda e: picker.next_page(),
                        ),
                    ],
                    alignment=ft.MainAxisAlignment.CENTER,
                ),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            scroll=ft.ScrollMode.AUTO,
        )
    )


if __name__ == "__main__":
    ft.app(target=main)
