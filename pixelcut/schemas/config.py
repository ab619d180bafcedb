from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Literal

class SamplerConfig(BaseModel):
    samples_per_side: int = Field(40, ge=1)
    border_depth: int | None = None       # None -> max(border_depth_min, ratio * min(W, H))
    border_depth_min: int = 5
    border_depth_ratio: float = 0.03

class ClusterConfig(BaseModel):
    distance_threshold: float = 20.0
    min_prevalence: float = 0.08          # share of valid samples a cluster must exceed

class BackgroundConfig(BaseModel):
    distance_threshold: float = 25.0      # strict: distance < threshold is background

class HsvRange(BaseModel):
    h_max: float                          # degrees
    s_min: float
    s_max: float
    v_min: float
    v_max: float

class SkinConfig(BaseModel):
    enabled: bool = True
    ranges: List[HsvRange] = Field(
        default_factory=lambda: [
            HsvRange(h_max=50.0, s_min=0.23, s_max=0.68, v_min=0.35, v_max=1.0),  # light to medium
            HsvRange(h_max=50.0, s_min=0.20, s_max=0.80, v_min=0.10, v_max=0.60),  # darker tones
        ]
    )

class ClothingConfig(BaseModel):
    enabled: bool = True
    bright_min: float = 180.0
    bright_window: int = 7
    bright_similar_diff: float = 30.0
    bright_similar_ratio: float = 0.60
    texture_window: int = 5
    texture_min: float = 5.0              # exclusive band on mean perceptual distance
    texture_max: float = 25.0
    contrast_diff: float = 50.0
    contrast_min_count: int = 3

class CompositeConfig(BaseModel):
    outer_border_px: int = 10             # uncertain pixels this close to an edge go to background
    neighborhood_ratio: float = 0.70      # of the 5x5 neighbors that are flood-filled background
    island_max_px: int = 100              # foreground components smaller than this are noise
    border_force_px: int = 5

class PostProcessConfig(BaseModel):
    transparent_region_px: int = 200
    opaque_region_px: int = 100
    smooth_edges: bool = True

class BrushConfig(BaseModel):
    radius: int = Field(10, ge=1)

class BlurConfig(BaseModel):
    sigma: float = 5.0
    alpha_cutoff: int = 200               # pixels with alpha below this get blurred RGB

class SegmentationConfig(BaseModel):
    sampler: SamplerConfig = Field(default_factory=SamplerConfig)
    cluster: ClusterConfig = Field(default_factory=ClusterConfig)
    background: BackgroundConfig = Field(default_factory=BackgroundConfig)
    skin: SkinConfig = Field(default_factory=SkinConfig)
    clothing: ClothingConfig = Field(default_factory=ClothingConfig)
    composite: CompositeConfig = Field(default_factory=CompositeConfig)
    post: PostProcessConfig = Field(default_factory=PostProcessConfig)
    brush: BrushConfig = Field(default_factory=BrushConfig)
    blur: BlurConfig = Field(default_factory=BlurConfig)

class PathsConfig(BaseModel):
    input_dir: str
    output_dir: str
    logs_dir: str

class RunConfig(BaseModel):
    limit: int = 300
    num_workers: int = 2
    patterns: List[str] = Field(default_factory=lambda: ["*.png", "*.jpg", "*.jpeg", "*.webp"])
    save_mask: bool = False
    save_blur: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

class AppConfig(BaseModel):
    paths: PathsConfig
    run: RunConfig = Field(default_factory=RunConfig)
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
