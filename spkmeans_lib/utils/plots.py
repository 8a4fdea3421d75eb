import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns


def plot_clustering(model, axs = None, title:str = None):
    """
    Visual inspection of a fitted SphericalKMeans: partition population
    histogram and quality along the iterations.

    Parameters:
    -----------
    model : SphericalKMeans
        A fitted estimator
    axs : array of 2 matplotlib Axes, optional
        Created when None
    title : str, optional
        Figure title

    Returns:
    --------
    The array of Axes
    """
    if axs is None :
        fig, axs = plt.subplots(1, 2, figsize=(12, 4))
    sizes = np.array([p.shape[0] for p in model.partitions_])
    cluster_ids = [i + 1 for i in range(sizes.shape[0])]

    sns.barplot(x=cluster_ids, y=sizes, ax=axs[0], color='seagreen')
    axs[0].set_title("Partition population histogram")
    axs[0].set_xlabel("Partition")
    axs[0].set_ylabel("Documents")

    history = model.quality_history_
    sns.lineplot(x=list(range(len(history))), y=list(history), marker='o', ax=axs[1], color='darkorange')
    axs[1].set_title(f"Quality after {model.n_iter_} iterations")
    axs[1].set_xlabel("Iteration")
    axs[1].set_ylabel("Quality")

    if title is not None :
        axs[0].figure.suptitle(title)
    return axs
