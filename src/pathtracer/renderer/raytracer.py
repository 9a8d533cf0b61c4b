# renderer/raytracer.py
import logging
import math
import random
import time
from concurrent.futures import Executor, ProcessPoolExecutor
from typing import NamedTuple, Optional

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.config import DEFAULT_CHUNK_COUNT, RenderSettings, validate_render_params
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.environment import EnvironmentMap
from pathtracer.renderer.integrator import preview_color, trace_path
from pathtracer.renderer.sampler import SAMPLE_BLOCK_SIZE, SampleBlock

logger = logging.getLogger(__name__)


class FrameJob(NamedTuple):
    """Read-only state shared by every chunk of one pass."""
    world: Hittable
    camera: Camera
    width: int
    height: int
    sample_rate: int
    max_bounce: int
    environment: Optional[EnvironmentMap]
    light_clamp: float
    russian_roulette: bool
    preview: bool


def as_seed_sequence(seed) -> np.random.SeedSequence:
    """
    None draws fresh OS entropy; an int or an existing SeedSequence is
    reproducible. SeedSequences are copied so spawning never depends on
    what the caller spawned from them before.
    """
    if isinstance(seed, np.random.SeedSequence):
        return np.random.SeedSequence(seed.entropy, spawn_key=seed.spawn_key)
    return np.random.SeedSequence(seed)


def pass_seed(seed, pass_index: int) -> np.random.SeedSequence:
    """
    Seed of pass ``pass_index`` of a run seeded with ``seed``. Fresh entropy
    when ``seed`` is None.
    """
    base = as_seed_sequence(seed)
    if seed is None:
        return base
    return np.random.SeedSequence(base.entropy, spawn_key=base.spawn_key + (pass_index,))


def chunk_bounds(pixel_count: int, chunk_count: int):
    """Contiguous ``(start, end)`` ranges covering ``range(pixel_count)`` in order."""
    edges = np.linspace(0, pixel_count, chunk_count + 1).astype(np.int64)
    return [(int(edges[i]), int(edges[i + 1])) for i in range(chunk_count)]


def render_chunk(job: FrameJob, start: int, end: int, seed: np.random.SeedSequence) -> np.ndarray:
    """
    Colors of pixels ``start`` to ``end - 1`` as an ``(end - start, 3)`` array.

    Pixel ``i`` sits at ``x = i % width`` and ``y = height - 1 - i // width``,
    so the first row of the buffer is the top of the image. The chunk owns
    its random generator and its sample block.
    """
    rng = random.Random(int(seed.generate_state(1, dtype=np.uint64)[0]))
    sampler = SampleBlock.draw(rng, SAMPLE_BLOCK_SIZE)
    out = np.zeros((end - start, 3), dtype=np.float64)

    for row, i in enumerate(range(start, end)):
        x = i % job.width
        y = job.height - 1 - i // job.width

        if job.preview:
            ray = job.camera.get_ray(x, y, 0.0, 0.0, job.width, job.height, rng)
            color = preview_color(ray, job.world, job.environment)
        else:
            color = Vector3.zero()
            for _ in range(job.sample_rate):
                jx, jy = sampler.next()
                ray = job.camera.get_ray(x, y, jx, jy, job.width, job.height, rng)
                color = color + trace_path(ray, job.world, job.max_bounce, sampler, rng,
                                           job.environment, job.light_clamp, job.russian_roulette)
            color = color / job.sample_rate

        out[row] = (color.x, color.y, color.z)

    logger.debug("Chunk %d-%d done", start, end)
    return out


class Renderer:
    """
    Parallel chunked scheduler for one camera and scene.

    Each call to ``render`` traces one pass: every pixel averages
    ``sample_rate`` paths and the result is added onto the caller's buffer.
    Averaging over several passes is left to the caller (see ``accumulate``).

    With a seed set, pass ``n`` is seeded from ``(seed, n)``: a run is
    reproducible from a fresh renderer while every pass draws new samples.
    ``reset`` restarts the pass count.

    Chunks run on ``executor`` when one is given, else on a process pool of
    ``max_workers`` created for the call. ``render_chunk`` is a module-level
    function and the scene pickles, so any Executor works.
    """

    def __init__(self, world: Hittable, camera: Camera, width: int, height: int,
                 sample_rate: int = 1, max_bounce: int = 4,
                 environment: Optional[EnvironmentMap] = None, light_clamp: float = math.inf,
                 chunk_count: int = DEFAULT_CHUNK_COUNT, max_workers: Optional[int] = None,
                 executor: Optional[Executor] = None, seed=None, russian_roulette: bool = True):
        validate_render_params(width, height, sample_rate, max_bounce, chunk_count, max_workers, light_clamp)
        self.world = world
        self.camera = camera
        self.width = width
        self.height = height
        self.sample_rate = sample_rate
        self.max_bounce = max_bounce
        self.environment = environment
        self.light_clamp = light_clamp
        self.chunk_count = chunk_count
        self.max_workers = max_workers
        self.executor = executor
        self.seed = seed
        self.russian_roulette = russian_roulette
        self.pass_index = 0

        logger.info("Renderer %dx%d, %d samples, %d bounces, %d chunks",
                    width, height, sample_rate, max_bounce, chunk_count)

    @classmethod
    def from_settings(cls, world: Hittable, camera: Camera, settings: RenderSettings,
                      environment: Optional[EnvironmentMap] = None,
                      executor: Optional[Executor] = None) -> "Renderer":
        settings.validate()
        return cls(world, camera, settings.width, settings.height,
                   sample_rate=settings.sample_rate,
                   max_bounce=settings.max_bounce,
                   environment=environment,
                   light_clamp=settings.light_clamp,
                   chunk_count=settings.chunk_count,
                   max_workers=settings.max_workers,
                   executor=executor,
                   seed=settings.seed,
                   russian_roulette=settings.russian_roulette)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def _job(self, preview: bool) -> FrameJob:
        return FrameJob(self.world, self.camera, self.width, self.height, self.sample_rate,
                        self.max_bounce, self.environment, self.light_clamp,
                        self.russian_roulette, preview)

    def _run(self, job: FrameJob, seed) -> np.ndarray:
        bounds = chunk_bounds(self.pixel_count, self.chunk_count)
        seeds = as_seed_sequence(seed).spawn(len(bounds))
        starts = [start for start, _ in bounds]
        ends = [end for _, end in bounds]
        jobs = [job] * len(bounds)

        if self.executor is not None:
            chunks = list(self.executor.map(render_chunk, jobs, starts, ends, seeds))
        else:
            with ProcessPoolExecutor(max_workers=self.max_workers) as executor:
                chunks = list(executor.map(render_chunk, jobs, starts, ends, seeds))
        return np.concatenate(chunks, axis=0)

    def render(self, buffer: Optional[np.ndarray] = None, seed=None) -> np.ndarray:
        """
        Traces one pass and returns ``buffer + pass`` as a new
        ``(width * height, 3)`` array.

        Without ``seed`` the pass is seeded from the renderer's seed and pass
        count, and the count advances. An explicit ``seed`` is used as is and
        leaves the count alone. With neither set the pass draws fresh
        entropy.
        """
        if buffer is None:
            buffer = np.zeros((self.pixel_count, 3), dtype=np.float64)
        elif buffer.shape != (self.pixel_count, 3):
            raise ValueError(f"Buffer shape {buffer.shape} does not match ({self.pixel_count}, 3)")

        start = time.perf_counter()
        if seed is None:
            seed = pass_seed(self.seed, self.pass_index)
            self.pass_index += 1
        frame = self._run(self._job(preview=False), seed)
        logger.info("Frame took %.3f seconds.", time.perf_counter() - start)
        return buffer + frame

    def reset(self):
        """Restart the pass sequence, e.g. after the camera moved."""
        self.pass_index = 0

    def preview(self) -> np.ndarray:
        """One cheap single-hit shaded ray per pixel, ``(width * height, 3)``."""
        start = time.perf_counter()
        frame = self._run(self._job(preview=True), self.seed)
        logger.debug("Preview took %.3f seconds.", time.perf_counter() - start)
        return frame


def accumulate(renderer: Renderer, passes: int, seed=None) -> np.ndarray:
    """
    Average of ``passes`` render passes, each seeded from ``seed``.
    """
    if passes <= 0:
        raise ValueError(f"passes must be positive, got {passes}")

    buffer = np.zeros((renderer.pixel_count, 3), dtype=np.float64)
    base = renderer.seed if seed is None else seed
    for pass_seed in as_seed_sequence(base).spawn(passes):
        buffer = renderer.render(buffer, seed=pass_seed)
    return buffer / passes
