## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
import sys
import numpy as np
import scipy.stats as stats
import matplotlib.pyplot as plt
from matplotlib import interactive


class Figure:
    """Figures manager class.

    Thin wrapper around a matplotlib figure with helpers to draw data,
    posterior means with coverage intervals, and posterior sample paths.
    """

    def __init__(self, nrows=1, ncols=1, isinteractive=True, boxoff=True, **kargs):
        # Check if we run in interpreter mode
        self.interpreter = False
        try:
            if sys.ps1:
                self.interpreter = True
        except AttributeError:
            self.interpreter = False
            if sys.flags.interactive:
                self.interpreter = True

        if isinteractive & self.interpreter:
            interactive(True)

        self.boxoff = boxoff

        self.fig = plt.figure(**kargs)

        self.nrows = nrows
        self.ncols = ncols
        self.axes = []
        for i in range(nrows * ncols):
            self.axes.append(self.fig.add_subplot(nrows, ncols, i + 1))
        self.ax = self.axes[0]
        if self.boxoff:
            self.set_boxoff()

    def set_boxoff(self):
        self.ax.spines["right"].set_visible(False)
        self.ax.spines["top"].set_visible(False)
        self.ax.tick_params(direction="in")

    def subplot(self, i):
        self.ax = self.axes[i - 1]
        if self.boxoff:
            self.set_boxoff()

    def show(self, grid=None, legend=None, legend_fontsize=None, xlim=None):
        if grid:
            self.grid()
        if legend and legend_fontsize is not None:
            self.legend(fontsize=legend_fontsize)
        elif legend:
            self.legend()
        if xlim is not None:
            self.xlim(xlim)
        plt.show()

    def close(self):
        plt.close(self.fig)

    def plot(self, x, z, *args, **kargs):
        self.ax.plot(x, z, *args, **kargs)

    def plotdata(self, x, z, label="data"):
        self.ax.plot(x, z, "rs", markerfacecolor="none", markersize=6, label=label)

    def xylabels(self, sx="", sy=""):
        self.ax.set_xlabel(sx)
        self.ax.set_ylabel(sy)

    def title(self, s):
        self.ax.set_title(s)

    def legend(self, **kwargs):
        self.ax.legend(**kwargs)

    def grid(
        self,
        visible=True,
        which="major",
        linestyle=(0, (1, 5)),
        linewidth=0.5,
        **kwargs
    ):
        self.ax.grid(visible, which, linestyle=linestyle, linewidth=linewidth, **kwargs)

    def xlim(self, new_limits=None):
        if new_limits is None:
            return self.ax.get_xlim()
        else:
            self.ax.set_xlim(new_limits)
            return new_limits

    def plotgp(
        self,
        x,
        mean,
        sd,
        mean_label="posterior mean",
        ci=0.95,
        ci_label="CI 95%",
        **kwargs
    ):
        """Posterior mean with a symmetric Gaussian coverage interval.

        norminv (1 - 0.05/2)  = 1.959964
        """
        mean = np.asarray(mean).flatten()
        sd = np.asarray(sd).flatten()
        x = np.asarray(x).flatten()
        delta = stats.norm.ppf((1 + ci) / 2)

        self.ax.plot(x, mean, "#F2404C", linewidth=2.0, label=mean_label)

        lower = mean - delta * sd
        upper = mean + delta * sd
        kwargs.setdefault("alpha", 0.8)
        kwargs.setdefault("linewidth", 0.5)
        self.ax.fill(
            np.hstack((x, x[::-1])),
            np.hstack((upper, lower[::-1])),
            color="#BFBFBF",
            label=ci_label,
            **kwargs
        )

    def plotpaths(self, x, samples, **kwargs):
        """Sample paths, one per row of `samples` (shape (k, q))."""
        x = np.asarray(x).flatten()
        kwargs.setdefault("linewidth", 0.5)
        kwargs.setdefault("color", "#4C72B0")
        self.ax.plot(x, np.asarray(samples).T, **kwargs)


def plot_predictions(z, zpred, sd=None, title="Predictions"):
    """Predicted vs. true values, with 95% intervals if `sd` is given."""
    fig = Figure()
    z = np.asarray(z).flatten()
    zpred = np.asarray(zpred).flatten()
    if sd is None:
        fig.ax.plot(z, zpred, "ko", ls="None")
    else:
        fig.ax.errorbar(z, zpred, 1.96 * np.asarray(sd).flatten(), fmt="ko", ls="None")
    fig.xylabels("true values", "predicted")
    fig.title(title)
    (xmin, xmax), (ymin, ymax) = fig.ax.get_xlim(), fig.ax.get_ylim()
    xmin = min(xmin, ymin)
    xmax = max(xmax, ymax)
    fig.ax.plot([xmin, xmax], [xmin, xmax], "--")
    fig.grid()
    return fig
