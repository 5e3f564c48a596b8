from pathlib import Path
from typing import List, Optional

from loguru import logger
from tqdm import tqdm

from ..config.common import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR, ERROR_LOG_ENABLED
from ..config.video import ENCODER_ARGS
from ..domain.job import BatchResult, ConversionJob
from ..services.discovery_service import discover_jobs
from ..services.encoder_service import MovConverter
from ..services.logging_service import ErrorLog
from ..services.result_service import ResultAggregator, summary_lines
from ..utils.ffmpeg_utils import get_ffmpeg_path, get_ffprobe_path
from ..utils.format_utils import format_timedelta


def default_converter() -> MovConverter:
    ffmpeg_path = get_ffmpeg_path()
    return MovConverter(ffmpeg_path, ENCODER_ARGS, get_ffprobe_path(ffmpeg_path))


class BatchConversionPipeline:
    """
    Converts every MOV file of the input directory, one after the other.

    `run()` raises `DiscoveryError` when the input directory cannot be read; in
    that case no job is started and no BatchResult exists. Every other problem
    is recorded on its job and the batch carries on.
    """

    converter: MovConverter
    aggregator: ResultAggregator
    jobs: List[ConversionJob]

    def __init__(
        self,
        input_dir: Path = DEFAULT_INPUT_DIR,
        output_dir: Path = DEFAULT_OUTPUT_DIR,
        delete_sources: bool = False,
        converter: Optional[MovConverter] = None,
        error_log_enabled: bool = ERROR_LOG_ENABLED,
        show_progress: bool = True,
    ):
        self.input_dir = input_dir
        self.output_dir = output_dir
        self.converter = converter or default_converter()
        error_log = ErrorLog(output_dir) if error_log_enabled else None
        self.aggregator = ResultAggregator(delete_sources=delete_sources, error_log=error_log)
        self.show_progress = show_progress
        self.jobs = []

    @property
    def result(self) -> BatchResult:
        return self.aggregator.result

    def run(self) -> BatchResult:
        self.jobs = discover_jobs(self.input_dir, self.output_dir)
        self.process_multi_file()
        self.post_actions()
        return self.result

    def process_multi_file(self):
        total = len(self.jobs)
        tqdm.write(f"Found {total} MOV files to process")
        if not self.jobs:
            return

        logger.info(f"Converting {total} file(s) from '{self.input_dir}' to '{self.output_dir}'")
        with tqdm(total=total, unit="file", dynamic_ncols=True, disable=not self.show_progress) as pbar:
            for job in self.jobs:
                pbar.set_description(f"Converting: {job.name}")
                pbar.set_postfix_str("starting")

                def show_progress(_job: ConversionJob, progress_line: str):
                    pbar.set_postfix_str(progress_line)

                self.converter.convert(job, on_progress=show_progress)
                self.aggregator.record(job)

                if job.succeeded:
                    tqdm.write(f"✓ Successfully converted: {job.name} ({format_timedelta(job.elapsed)})")
                else:
                    last_reason_line = ((job.reason or "").splitlines() or [""])[-1]
                    tqdm.write(f"✗ Failed to convert {job.name}: {last_reason_line}")
                pbar.update(1)
            pbar.set_description("Conversion complete")
            pbar.set_postfix_str("")

    def post_actions(self):
        removed = self.aggregator.remove_converted_sources()
        if removed:
            logger.info(f"Deleted {len(removed)} converted source file(s).")
        tqdm.write("")
        for line in summary_lines(self.result):
            tqdm.write(line)
