"""Wave Analyzer -- numerical core for one-dimensional wave superposition studies.

This package provides tools for:
- Generating sinusoidal, cosine, square, triangular and sawtooth waves
- Superposing owned waves and sampling them over time or space
- Computing radix-2 spectra, harmonic tables, THD and FFT-domain filters
- Classifying two-wave and multi-wave interference (beats, standing waves,
  nodes/antinodes, resonance)

Key principles:
- Degenerate inputs degrade to defined sentinels (empty/zero results), never a crash
- Sample buffers are plain numpy arrays; results are frozen dataclasses
- Display, plotting and file dialogs are left to the consumers

Main subpackages:
- models: Wave generators, spectrum/interference result containers, AnalysisProfile
- analysis: WaveCollection, Fourier engine, interference analyzer, pipeline
"""

__all__ = []
