# Copyright 2025 Loopper-AI
# Parser modules for S3 notification events

from .s3_event_parser import S3EventParser

__all__ = ["S3EventParser"]
