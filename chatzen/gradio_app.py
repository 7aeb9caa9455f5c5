from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

if __package__ in {None, ""}:
    # Allow running via ``python chatzen/gradio_app.py`` by adding repo root to sys.path
    sys.path.append(str(Path(__file__).resolve().parents[1]))

import gradio as gr

from chatzen.cli import add_common_arguments, build_config
from chatzen.core.chat import SUGGESTIONS
from chatzen.core.config import AppConfig
from chatzen.core.errors import ConfigError
from chatzen.core.modes import DOCK_ITEMS, AppMode
from chatzen.core.sage_backend import WisdomClient, build_wisdom_client
from chatzen.core.sounds import SOUND_CATALOG, icon_glyph
from chatzen.gradio_controller import AUDIO_ERROR_ELEMENT_ID, GradioChatZenController
from chatzen.logging_config import setup_logging

logger = logging.getLogger(__name__)

PANEL_ORDER = (AppMode.HOME, AppMode.LASER, AppMode.SOUNDS, AppMode.ZEN_SAGE)
FRAME_INTERVAL = 0.05
VOLUME_JS = """
(volume) => {
    document.querySelectorAll('audio.chatzen-audio').forEach((audio) => { audio.volume = volume; });
    return volume;
}
"""
HIDDEN_CSS = f"#{AUDIO_ERROR_ELEMENT_ID} {{ display: none; }}"


def panel_visibility(mode: AppMode) -> List[Any]:
    return [gr.update(visible=(panel == mode)) for panel in PANEL_ORDER]


def select_mode(controller: GradioChatZenController, mode_value: str):
    controller.select_mode(AppMode(mode_value))
    return (
        *panel_visibility(controller.shell.mode),
        controller.audio_html(),
        controller.sound_status(),
        controller.chat_messages(),
        gr.update(visible=controller.show_suggestions()),
        play_label(controller),
    )


def play_label(controller: GradioChatZenController) -> str:
    return "⏸ Pause" if controller.pointer.running else "▶ Play"


def toggle_laser(controller: GradioChatZenController):
    controller.toggle_laser()
    return play_label(controller)


def set_speed(controller: GradioChatZenController, speed: float) -> None:
    controller.set_speed(speed)


def tick(controller: GradioChatZenController):
    return controller.frame()


def toggle_sound(controller: GradioChatZenController, track_id: str):
    controller.toggle_sound(track_id)
    return controller.audio_html(), controller.sound_status()


def set_volume(controller: GradioChatZenController, volume: float):
    controller.set_volume(volume)
    return controller.sound_status()


def report_audio_error(controller: GradioChatZenController, payload: str):
    controller.report_audio_error(payload)
    return controller.audio_html(), controller.sound_status()


def ask(controller: GradioChatZenController, text: str):
    messages, remaining = controller.ask(text)
    return messages, remaining, gr.update(visible=controller.show_suggestions())


def build_demo(client: WisdomClient, config: Optional[AppConfig] = None) -> gr.Blocks:
    config = config or AppConfig()

    with gr.Blocks(title="Chat Zen", css=HIDDEN_CSS) as demo:
        controller_state = gr.State(lambda: GradioChatZenController(client, config))

        with gr.Column(visible=True) as home_panel:
            gr.Markdown("<center><h1>🐈 CHAT ZEN</h1>L'expérience ultime de relaxation pour votre félin.</center>")
            with gr.Row():
                home_laser_btn = gr.Button("Jouer (Laser)")
                home_sounds_btn = gr.Button("Relaxer (Sons)")

        with gr.Column(visible=False) as laser_panel:
            laser_image = gr.Image(label="Mode Chasse Laser", type="pil", interactive=False)
            with gr.Row():
                play_btn = gr.Button("▶ Play", variant="primary")
                speed_slider = gr.Slider(
                    config.pointer.min_speed,
                    config.pointer.max_speed,
                    value=config.pointer.default_speed,
                    step=1,
                    label="Vitesse",
                )

        with gr.Column(visible=False) as sounds_panel:
            gr.Markdown("## Ambiance Sonore")
            with gr.Row():
                track_buttons = [
                    (track.id, gr.Button(f"{icon_glyph(track.icon)} {track.title}")) for track in SOUND_CATALOG
                ]
            with gr.Row():
                mute_btn = gr.Button("🔇", scale=0)
                volume_slider = gr.Slider(0.0, 1.0, value=config.sounds.default_volume, step=0.01, label="Volume")
            sound_status = gr.Markdown("")
            audio_html = gr.HTML("")
            # Rendered but hidden by CSS so the page script can write into it.
            audio_error = gr.Textbox(elem_id=AUDIO_ERROR_ELEMENT_ID, show_label=False, container=False)

        with gr.Column(visible=False) as sage_panel:
            gr.Markdown("### 🐈 Le Sage Félin")
            chatbot = gr.Chatbot(type="messages", label="En ligne")
            with gr.Row(visible=True) as suggestions_row:
                suggestion_buttons = [gr.Button(text, size="sm") for text in SUGGESTIONS]
            with gr.Row():
                question = gr.Textbox(placeholder="Posez votre question au sage...", show_label=False, scale=4)
                send_btn = gr.Button("➤", variant="primary", scale=1)

        dock = gr.Radio(
            choices=[(f"{item.icon} {item.label}", item.mode.value) for item in DOCK_ITEMS],
            value=AppMode.HOME.value,
            label="Dock",
        )

        timer = gr.Timer(FRAME_INTERVAL)

        panels = [home_panel, laser_panel, sounds_panel, sage_panel]

        dock.change(
            fn=select_mode,
            inputs=[controller_state, dock],
            outputs=[*panels, audio_html, sound_status, chatbot, suggestions_row, play_btn],
        )
        home_laser_btn.click(fn=lambda: AppMode.LASER.value, inputs=[], outputs=[dock])
        home_sounds_btn.click(fn=lambda: AppMode.SOUNDS.value, inputs=[], outputs=[dock])

        play_btn.click(fn=toggle_laser, inputs=[controller_state], outputs=[play_btn])
        speed_slider.change(fn=set_speed, inputs=[controller_state, speed_slider], outputs=[])
        timer.tick(fn=tick, inputs=[controller_state], outputs=[laser_image])

        for track_id, button in track_buttons:
            button.click(
                fn=lambda controller, track_id=track_id: toggle_sound(controller, track_id),
                inputs=[controller_state],
                outputs=[audio_html, sound_status],
            )
        audio_error.input(
            fn=report_audio_error,
            inputs=[controller_state, audio_error],
            outputs=[audio_html, sound_status],
        )
        mute_btn.click(fn=lambda: 0.0, inputs=[], outputs=[volume_slider])
        volume_slider.change(fn=None, inputs=[volume_slider], outputs=[], js=VOLUME_JS)
        volume_slider.change(fn=set_volume, inputs=[controller_state, volume_slider], outputs=[sound_status])

        for button, text in zip(suggestion_buttons, SUGGESTIONS):
            button.click(fn=lambda text=text: text, inputs=[], outputs=[question])
        send_btn.click(fn=ask, inputs=[controller_state, question], outputs=[chatbot, question, suggestions_row])
        question.submit(fn=ask, inputs=[controller_state, question], outputs=[chatbot, question, suggestions_row])

        demo.load(
            fn=lambda controller: (controller.chat_messages(), controller.sound_status()),
            inputs=[controller_state],
            outputs=[chatbot, sound_status],
        )

    return demo


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Chat Zen (Gradio UI)")
    add_common_arguments(parser)
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)
    try:
        config = build_config(args)
        client = build_wisdom_client(args.sage_backend, config.sage)
    except ConfigError as exc:
        logger.error("Cannot start: %s", exc)
        return 2
    demo = build_demo(client, config)
    demo.launch()
    return 0


if __name__ == "__main__":
    sys.exit(main())
