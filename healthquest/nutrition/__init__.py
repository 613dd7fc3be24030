# -*- coding: utf-8 -*-
"""Food search / nutrition facts backed by Nutritionix with a local fallback list."""
