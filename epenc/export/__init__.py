"""Encode job building, HandBrake execution and output formatters."""

from epenc.export.handbrake import EncoderOptions, build_encode_cmd, get_dry_run_commands, run_encode_jobs
from epenc.export.jobs import build_encode_jobs
from epenc.export.json_out import export_json, groups_to_dict, jobs_to_dict
from epenc.export.text_report import jobs_report, selection_report, titles_report
