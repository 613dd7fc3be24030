# -*- coding: utf-8 -*-
"""HealthQuest backend (FastAPI + SQLite)."""
