# -*- coding: utf-8 -*-
"""User profiles (account + onboarding details, derived BMI)."""
