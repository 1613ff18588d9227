"""
Diagnostics output for strain peaks and miss penalty curves.
"""

from typing import Iterable

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from skillcurve.custom_types import StrainPeak
from skillcurve.numerics.miss_curve import MissPenaltyCurve


def strain_peaks_frame(peaks: Iterable[StrainPeak]) -> pd.DataFrame:
    rows = [{"timestamp": p.timestamp, "value": p.value} for p in peaks]
    df = pd.DataFrame(rows, columns=["timestamp", "value"])
    return df.astype({"timestamp": "float64", "value": "float64"})


def plot_strain_peaks(peaks: Iterable[StrainPeak], out_path, title: str = "Strain"):
    df = strain_peaks_frame(peaks)

    plt.figure()
    plt.plot(df["timestamp"] / 1000.0, df["value"])
    plt.xlabel("Time (s)")
    plt.ylabel("Strain")
    plt.title(title)
    plt.tight_layout()
    plt.savefig(out_path)
    plt.close()


def plot_miss_penalty_curve(curve: MissPenaltyCurve, out_path, points: int = 101):
    fractions = np.linspace(0.0, 1.0, points)
    misses = [curve.miss_count(f) for f in fractions]

    plt.figure()
    plt.plot(fractions, misses)
    plt.xlabel("Fraction of full combo skill")
    plt.ylabel("Expected misses")
    plt.title("Miss Penalty Curve")
    plt.tight_layout()
    plt.savefig(out_path)
    plt.close()
