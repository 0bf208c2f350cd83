# -*- coding: utf-8 -*-
"""
Core domain logic: compose stacks and the app marketplace.
"""
