"""
Pipeline stages: script generation, voiceover audio and video assembly
"""
