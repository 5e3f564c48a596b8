"""
Services Package for mov2mp4.

This package contains the service layer: classes and functions that perform one
step of a batch and sit between the pipeline and the domain models.

- **Discovery Service (`iter_mov_files`, `discover_jobs`):**
  Lists the MOV files of the input directory and creates a job for each.

- **Encoder Service (`MovConverter`):**
  Runs FFmpeg for a job, reports progress and records the outcome.

- **Result Service (`ResultAggregator`, `summary_lines`):**
  Collects outcomes, removes converted sources on request and renders the
  final summary.

- **Logging Service (`ErrorLog`):**
  Keeps a plain-text record of failed conversions.
"""
