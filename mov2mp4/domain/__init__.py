"""
This package contains the core domain models of mov2mp4.

Modules:
    exceptions.py: Custom exception types. `DiscoveryError` is the only fatal
                   one; everything under `JobException` is recorded on a job.
    job.py: `ConversionJob`, which tracks one conversion through its states,
            and `BatchResult`, which collects the outcomes of a run.
"""
