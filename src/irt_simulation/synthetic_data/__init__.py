"""
Synthetic response data generation.

This module produces simulated item responses from known IRT parameters
(Rasch, 2PL, 3PL, PCM, GPCM) for exercising an external fitting library.
"""
