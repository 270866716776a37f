"""Configuration for geometry, layout and pointer input."""

from dataclasses import dataclass

from brainmap.config import Settings


@dataclass
class GeometryConfig:
    """Node sizing and placement constants."""

    center_font_size: int = 18  # Focal node font size
    normal_font_size: int = 16
    padding: int = 14  # Padding around the label
    min_label_width: float = 30.0  # Short labels are sized as if this wide

    view_margin: float = 20.0  # Hard clamp distance from canvas edges

    # Child placement
    spawn_margin: float = 40.0
    spawn_inner_radius: float = 80.0
    spawn_band: float = 70.0  # Radius drawn from [inner, inner + band)
    spawn_attempts: int = 12
    estimated_radius: float = 50.0  # Room reserved for a not-yet-measured node

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeometryConfig":
        return cls(
            center_font_size=settings.graph_center_font_size,
            normal_font_size=settings.graph_normal_font_size,
            padding=settings.graph_padding_around,
        )


@dataclass
class LayoutConfig:
    """Relaxation constants for the per-frame layout step."""

    min_spacing: float = 10.0  # Gap kept between node circles
    repulsion_damping: float = 0.5
    boundary_gain: float = 0.1
    margin: float = 20.0

    friction: float = 0.8  # Velocity kept per frame
    time_step: float = 0.2
    move_threshold: float = 0.05

    focal_homing: float = 0.2  # Fraction of the offset to centre closed per frame
    focal_move_threshold: float = 0.5

    @classmethod
    def from_settings(cls, settings: Settings) -> "LayoutConfig":
        return cls(min_spacing=settings.graph_min_spacing)


@dataclass
class InputConfig:
    """Pointer gesture constants."""

    click_threshold: float = 5.0  # Max pointer travel (px) for a press to count as a click
