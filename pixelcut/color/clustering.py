from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List

from .model import Color, perceptual_distance
from ..schemas.config import ClusterConfig


@dataclass
class Cluster:
    """Greedy color cluster. The representative is the running count-weighted mean."""
    representative: Color
    count: int = 1
    members: List[Color] = field(default_factory=list)

    @classmethod
    def seed(cls, color: Color) -> "Cluster":
        return cls(representative=Color(float(color.r), float(color.g), float(color.b)),
                   count=1, members=[color])

    def add(self, color: Color) -> None:
        self.count += 1
        rep = self.representative
        n = self.count
        self.representative = Color(
            rep.r + (color.r - rep.r) / n,
            rep.g + (color.g - rep.g) / n,
            rep.b + (color.b - rep.b) / n,
        )
        self.members.append(color)

    def share(self, total: int) -> float:
        return self.count / total if total else 0.0


def cluster_colors(colors: Iterable[Color], threshold: float = 20.0) -> List[Cluster]:
    """
    Single-pass greedy clustering. Each color joins the first cluster whose
    representative is closer than `threshold`, otherwise it opens a new one.
    Fully transparent samples are dropped. Result is sorted by descending count.
    """
    clusters: List[Cluster] = []
    for c in colors:
        if c.a == 0:
            continue
        for cl in clusters:
            if perceptual_distance(c, cl.representative) < threshold:
                cl.add(c)
                break
        else:
            clusters.append(Cluster.seed(c))
    clusters.sort(key=lambda cl: cl.count, reverse=True)
    return clusters


def dominant_colors(colors: Iterable[Color], cfg: ClusterConfig | None = None) -> List[Color]:
    """
    Representatives of clusters whose share of the valid samples exceeds
    `cfg.min_prevalence`. Empty when no sample is opaque enough to count.
    """
    cfg = cfg or ClusterConfig()
    clusters = cluster_colors(colors, cfg.distance_threshold)
    total = sum(cl.count for cl in clusters)
    return [cl.representative for cl in clusters if cl.share(total) > cfg.min_prevalence]
