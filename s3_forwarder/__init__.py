# Copyright 2025 Loopper-AI
# Lambda: S3 object notifications → HTTP Event Collector
