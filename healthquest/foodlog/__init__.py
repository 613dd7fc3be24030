# -*- coding: utf-8 -*-
"""Food log domain.

Daily food-log entries per user. Entries are short-lived: anything dated
before the retention cutoff is removed after every insert, on demand, and by
the background scheduler started with the app.
"""
