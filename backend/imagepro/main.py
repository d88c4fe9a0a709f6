"""Gradio web interface for ImagePro Studio."""

from __future__ import annotations

import atexit
import contextlib
import logging
import os
import sys
import tempfile
import traceback
from pathlib import Path

from .config import Config
from .enums import ImageFormat, Operation
from .exceptions import ImageProError
from .helpers import format_file_size, format_size_change
from .logging_config import setup_logging
from .models import CompressionSettings, EnhanceSettings, ProcessedImageResult
from .session import ImageSession

logger = logging.getLogger("imagepro.main")

# Optional Gradio import
try:
    import gradio as gr

    HAS_GRADIO = True
except ImportError:
    HAS_GRADIO = False
    logger.error("Gradio not installed. Run: pip install gradio")

# Temp file management
_temp_files: list[str] = []


def _cleanup_temp_files() -> None:
    """Clean up temporary files."""
    for f in _temp_files:
        with contextlib.suppress(OSError):
            os.unlink(f)
    _temp_files.clear()


atexit.register(_cleanup_temp_files)


FORMAT_CHOICES = [("JPEG", "jpeg"), ("PNG", "png"), ("WebP", "webp")]
UPLOAD_TYPES = [".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp"]


def _write_result(result: ProcessedImageResult, filename: str) -> str:
    """Write result bytes to a temp file named for download."""
    directory = tempfile.mkdtemp(prefix="imagepro_")
    path = os.path.join(directory, filename)
    with open(path, "wb") as fh:
        fh.write(result.data)
    _temp_files.append(path)
    return path


def _describe_original(session: ImageSession) -> str:
    dims = session.dimensions
    suffix = Path(session.name or "").suffix.lstrip(".").upper() or "?"
    return (
        f"**Dimensions:** {dims.width} x {dims.height}  \n"
        f"**Format:** {suffix}  \n"
        f"**Size:** {format_file_size(len(session.data))}"
    )


def _describe_result(session: ImageSession) -> str:
    result = session.result
    lines = [
        f"**Dimensions:** {result.width} x {result.height}",
        f"**Format:** {result.format.value.upper()}",
        f"**Size:** {format_file_size(result.size)}",
        f"**Size change:** {format_size_change(len(session.data), result.size)}",
    ]
    if result.quality is not None:
        lines.append(f"**Quality:** {round(result.quality * 100)}%")
    return "  \n".join(lines)


def create_interface() -> object:
    """Create Gradio interface for ImagePro Studio."""
    with gr.Blocks(title="ImagePro Studio", theme=gr.themes.Soft()) as interface:
        gr.Markdown(
            """
        # ImagePro Studio
        **Resize • Compress • Enhance**

        Upload an image (max 50MB), pick an operation, then download the result.
        """
        )

        session_state = gr.State(ImageSession())

        with gr.Row():
            with gr.Column(scale=1):
                file_input = gr.File(
                    label="Upload Image",
                    file_types=UPLOAD_TYPES,
                    type="filepath",
                )
                original_preview = gr.Image(label="Original", type="filepath", height=300)
                original_info = gr.Markdown()
                reset_btn = gr.Button("New Image", size="sm")

            with gr.Column(scale=1):
                processed_preview = gr.Image(label="Processed", type="filepath", height=300)
                processed_info = gr.Markdown()
                download_file = gr.File(label="Download")

        with gr.Tabs():
            with gr.Tab("Resize"):
                with gr.Row():
                    resize_width = gr.Number(label="Width (px)", precision=0, minimum=1)
                    resize_height = gr.Number(label="Height (px)", precision=0, minimum=1)
                keep_aspect = gr.Checkbox(value=True, label="Maintain aspect ratio")
                resize_btn = gr.Button("Resize Image", variant="primary")

            with gr.Tab("Compress"):
                quality_slider = gr.Slider(
                    minimum=0.1,
                    maximum=1.0,
                    step=0.1,
                    value=Config.DEFAULT_COMPRESS_QUALITY,
                    label="Quality (smaller file ↔ better quality)",
                )
                compress_format = gr.Dropdown(
                    choices=FORMAT_CHOICES,
                    value=Config.DEFAULT_FORMAT.value,
                    label="Output Format",
                )
                compress_btn = gr.Button("Compress Image", variant="primary")

            with gr.Tab("Enhance"):
                target_kb = gr.Number(
                    value=Config.DEFAULT_TARGET_KB,
                    precision=0,
                    minimum=0,
                    label="Target Size (KB)",
                )
                enhance_format = gr.Dropdown(
                    choices=FORMAT_CHOICES,
                    value=Config.DEFAULT_FORMAT.value,
                    label="Output Format",
                )
                enhance_btn = gr.Button("Enhance Image", variant="primary")

        status = gr.Markdown("**Status:** Ready")

        # Event handlers
        def load_image(uploaded_file: str | None, session: ImageSession) -> tuple:
            if uploaded_file is None:
                session.reset()
                return session, None, "", None, None, "**Status:** Ready"

            try:
                data = Path(uploaded_file).read_bytes()
                analysis = session.load(data, Path(uploaded_file).name)
                return (
                    session,
                    uploaded_file,
                    _describe_original(session),
                    analysis["width"],
                    analysis["height"],
                    f"**Status:** Loaded {analysis['file']}",
                )
            except ImageProError as e:
                session.reset()
                return session, None, "", None, None, f"**Error:** {e}"

        file_input.change(
            load_image,
            inputs=[file_input, session_state],
            outputs=[
                session_state, original_preview, original_info,
                resize_width, resize_height, status,
            ],
        )

        def width_changed(width: float | None, lock: bool, session: ImageSession) -> object:
            if not lock or not width or session.dimensions is None:
                return gr.update()
            return session.resize_settings_for(width=int(width)).height

        def height_changed(height: float | None, lock: bool, session: ImageSession) -> object:
            if not lock or not height or session.dimensions is None:
                return gr.update()
            return session.resize_settings_for(height=int(height)).width

        resize_width.input(
            width_changed,
            inputs=[resize_width, keep_aspect, session_state],
            outputs=[resize_height],
        )
        resize_height.input(
            height_changed,
            inputs=[resize_height, keep_aspect, session_state],
            outputs=[resize_width],
        )

        async def run_operation(
            session: ImageSession, operation: Operation, settings: object
        ) -> tuple:
            try:
                result = await session.arun(operation, settings)
                path = _write_result(result, session.download_name)
                return (
                    session,
                    path,
                    _describe_result(session),
                    path,
                    f"**Status:** {operation.value.capitalize()} complete",
                )
            except ImageProError as e:
                return session, None, "", None, f"**Error:** {e}"
            except Exception as e:
                traceback.print_exc()
                return session, None, "", None, f"**Unexpected error:** {e}"

        async def do_resize(
            session: ImageSession, width: float | None, height: float | None, lock: bool
        ) -> tuple:
            if session.dimensions is None:
                return session, None, "", None, "**Error:** Please upload an image first"
            settings = session.resize_settings_for(
                width=int(width) if width else None,
                height=int(height) if height else None,
                maintain_aspect_ratio=False,
            )
            settings.maintain_aspect_ratio = lock
            return await run_operation(session, Operation.RESIZE, settings)

        async def do_compress(session: ImageSession, quality: float, fmt: str) -> tuple:
            if session.dimensions is None:
                return session, None, "", None, "**Error:** Please upload an image first"
            settings = CompressionSettings(quality=float(quality), format=ImageFormat.parse(fmt))
            return await run_operation(session, Operation.COMPRESS, settings)

        async def do_enhance(session: ImageSession, target: float | None, fmt: str) -> tuple:
            if session.dimensions is None:
                return session, None, "", None, "**Error:** Please upload an image first"
            settings = EnhanceSettings(
                target_size=int(target or 0), format=ImageFormat.parse(fmt)
            )
            return await run_operation(session, Operation.ENHANCE, settings)

        result_outputs = [
            session_state, processed_preview, processed_info, download_file, status,
        ]
        resize_btn.click(
            do_resize,
            inputs=[session_state, resize_width, resize_height, keep_aspect],
            outputs=result_outputs,
        )
        compress_btn.click(
            do_compress,
            inputs=[session_state, quality_slider, compress_format],
            outputs=result_outputs,
        )
        enhance_btn.click(
            do_enhance,
            inputs=[session_state, target_kb, enhance_format],
            outputs=result_outputs,
        )

        def reset(session: ImageSession) -> tuple:
            session.reset()
            _cleanup_temp_files()
            return (
                session, None, None, "", None, "", None, None, None,
                "**Status:** Ready",
            )

        reset_btn.click(
            reset,
            inputs=[session_state],
            outputs=[
                session_state, file_input, original_preview, original_info,
                processed_preview, processed_info, download_file,
                resize_width, resize_height, status,
            ],
        )

    return interface


def main() -> None:
    """Main entry point."""
    setup_logging(os.environ.get("IMAGEPRO_LOG_LEVEL", "INFO"))

    logger.info("=" * 70)
    logger.info("IMAGEPRO STUDIO - Resize, Compress, Enhance")
    logger.info("=" * 70)

    if not HAS_GRADIO:
        logger.error("Gradio is required. Run: pip install gradio")
        sys.exit(1)

    logger.info("Starting web interface...")

    try:
        interface = create_interface()
        interface.launch(
            server_name=Config.SERVER_HOST,
            server_port=Config.SERVER_PORT,
            share=False,
            show_error=True,
            max_file_size=Config.MAX_UPLOAD_BYTES,
        )
    except Exception as e:
        logger.error("Failed to start: %s", e)
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
