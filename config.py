import json, pathlib
from pydantic import BaseModel, Field
from typing import Optional


class Settings(BaseModel):
    rover_host: str = "192.168.1.239"
    rover_port: int = Field(5005, ge=1, le=65535)
    bind_host: str = ""
    bind_port: Optional[int] = Field(None, ge=0, le=65535)
    send_timeout: float = 0.5
    control_interval_ms: int = Field(50, gt=0)
    default_speed_multiplier: int = Field(1, ge=1, le=10)
    input_poll_rate_hz: int = 100
    gamepad_deadzone: float = 0.1
    gamepad_left_axis: int = 1
    gamepad_right_axis: int = 3
    camera_stream_url: str = "http://192.168.1.239:8000/stream.mjpg"
    camera_resolution: tuple[int, int] = (640, 480)
    stream_reconnect_delay: float = 2.0
    pipeline_poll_rate_ms: int = 50
    log_file_path: str = "teleop_client.log"
    logging_max_lines: int = 500


def load_config(path="config.json") -> Settings:
    config_file = pathlib.Path(path)
    if not config_file.exists():
        return Settings()
    raw = json.loads(config_file.read_text())
    return Settings(**raw)
