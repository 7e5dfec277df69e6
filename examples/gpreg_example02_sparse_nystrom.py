"""
Exact, sparse (subset of regressors) and Nystrom GP regression on a
noisy 2D dataset, compared by 10-fold cross-validation.

Landmarks are k-means centroids of the training points.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""
import gpreg.num as gnp
import gpreg as gr
import gpreg.misc.plotutils as plotutils
from gpreg.misc.landmarks import kmeans_landmarks, landmark_kernel_width
from gpreg.misc.validation import cross_validation, rmse, standardize


def branin(x):
    """Branin function on [-5, 10] x [0, 15]."""
    x1, x2 = x[:, 0], x[:, 1]
    a, b, c = 1.0, 5.1 / (4 * gnp.pi**2), 5.0 / gnp.pi
    r, s, t = 6.0, 10.0, 1.0 / (8 * gnp.pi)
    return a * (x2 - b * x1**2 + c * x1 - r) ** 2 + s * (1 - t) * gnp.cos(x1) + s


def generate_data(n, noise_std):
    x = gnp.rand(n, 2) * gnp.array([15.0, 15.0]) + gnp.array([-5.0, 0.0])
    z = branin(x) + noise_std * gnp.randn(n)
    return x, z


def main():
    gnp.set_seed(1234)
    n, m = 400, 30
    xi, zi = generate_data(n, noise_std=2.0)
    xi = standardize(xi)

    def exact(x, z):
        return gr.fit_exact(x, z, gr.kernel.GaussianKernel(0.5), 0.01, normalize=True)

    def landmark_fit(fit):
        def fit_with_landmarks(x, z):
            t = kmeans_landmarks(x, m, seed=0)
            kernel = gr.kernel.GaussianKernel(0.5)
            return fit(x, z, t, kernel, 0.01, normalize=True)

        return fit_with_landmarks

    t = kmeans_landmarks(xi, m, seed=0)
    print(f"landmark kernel width heuristic: {landmark_kernel_width(t):.3f}")

    fits = {
        "exact": exact,
        "sparse": landmark_fit(gr.fit_sparse),
        "nystrom": landmark_fit(gr.fit_nystrom),
    }

    for name, fit in fits.items():
        zcv = cross_validation(fit, xi, zi, k=10, seed=0)
        print(f"{name:8s} 10-fold CV RMSE = {rmse(zi, zcv):.4f}")
        fig = plotutils.plot_predictions(zi, zcv, title=f"{name} (10-fold CV)")
        fig.show()


if __name__ == "__main__":
    main()
