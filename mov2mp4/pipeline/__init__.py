"""
This package contains the conversion pipeline of mov2mp4.

The pipeline orchestrates a batch: it discovers the source files, runs the
converter for each of them in turn and hands the outcomes to the result
aggregator for deletion and the final summary.
"""
