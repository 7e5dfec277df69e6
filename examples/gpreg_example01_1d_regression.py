"""
GP regression in 1D with noisy observations: exact fit, posterior mean
with 95% coverage intervals, and sample paths from the joint posterior.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""
import gpreg.num as gnp
import gpreg as gr
import gpreg.misc.plotutils as plotutils


def twobumps(x):
    """1D test function with two bumps on [-1, 1]."""
    x = gnp.asarray(x).reshape(-1)
    return -(0.7 * x + gnp.sin(5 * x + 1) + 0.1 * gnp.sin(10 * x))


def generate_data(noise_std):
    """
    Returns
    -------
    tuple
        (xt, zt): prediction grid and true values
        (xi, zi): noisy observations
    """
    xt = gnp.linspace(-1.0, 1.0, 200).reshape(-1, 1)
    zt = twobumps(xt)

    ind = [10, 45, 100, 130, 131, 132, 133, 134, 160, 190]
    xi = xt[ind]
    zi = zt[ind] + noise_std * gnp.randn(len(ind))

    return xt, zt, xi, zi


def main():
    gnp.set_seed(0)
    noise_std = 0.1
    xt, zt, xi, zi = generate_data(noise_std)

    kernel = gr.kernel.GaussianKernel(0.3)
    model = gr.fit_exact(xi, zi, kernel, noise_std**2, normalize=True)
    print(model)

    zpm, zpsd = model.predict_batch(xt, return_sd=True)

    joint = model.joint_predict(xt)
    paths = joint.sample(5, rng=1)

    fig = plotutils.Figure(isinteractive=True)
    fig.plot(xt, zt, "k", linewidth=1, linestyle=(0, (5, 5)), label="truth")
    fig.plotgp(xt, zpm, zpsd)
    fig.plotpaths(xt, paths)
    fig.plotdata(xi, zi)
    fig.xylabels("$x$", "$z$")
    fig.title("Exact GP regression")
    fig.show(grid=True, xlim=[-1.0, 1.0], legend=True, legend_fontsize=9)


if __name__ == "__main__":
    main()
