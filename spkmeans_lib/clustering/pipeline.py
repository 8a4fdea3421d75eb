import argparse
import os
import sys
import warnings
from pathlib import Path

import matplotlib.pyplot as plt

from spkmeans_lib.clustering.similarity import resolve_n_jobs
from spkmeans_lib.clustering.sphere import SphericalKMeans
from spkmeans_lib.constants import (DEFAULT_K, DEFAULT_N_THREADS, DEFAULT_N_WORDS, DOC_FILEPATH,
                                    Q_THRESHOLD, VOCABULARY_FILEPATH)
from spkmeans_lib.errors import SPKMeansError
from spkmeans_lib.preprocessing.loader import Loader, load_words_file
from spkmeans_lib.utils.plots import plot_clustering
from spkmeans_lib.utils.report import cluster_summary, display_results


class SPKMeansPipeline :
    """Load a document file, cluster it and report the top words of each partition."""

    def __init__(self,
                doc_filepath = DOC_FILEPATH,
                vocabulary_filepath = VOCABULARY_FILEPATH,
                n_clusters:int = DEFAULT_K,
                n_jobs:int = DEFAULT_N_THREADS,
                threshold:float = Q_THRESHOLD,
                max_iter:int = None,
                n_words:int = DEFAULT_N_WORDS,
                verbose:bool = True):
        self.doc_filepath = Path(doc_filepath)
        self.vocabulary_filepath = Path(vocabulary_filepath) if vocabulary_filepath is not None else None
        self.n_clusters = n_clusters
        self.n_jobs = n_jobs
        self.threshold = threshold
        self.max_iter = max_iter
        self.n_words = n_words
        self.verbose = verbose

    def run(self):
        self.loader = Loader(self.doc_filepath, verbose=self.verbose)
        self.model = SphericalKMeans(n_clusters=self.n_clusters,
                                     threshold=self.threshold,
                                     max_iter=self.max_iter,
                                     n_jobs=self.n_jobs)
        self.model.fit(self.loader.matrix, verbose=self.verbose)
        self.words = self._load_words()
        return self

    def _load_words(self):
        if self.vocabulary_filepath is None :
            return None
        if not os.path.exists(self.vocabulary_filepath):
            warnings.warn(f"Vocabulary file {self.vocabulary_filepath} not found, showing word indices.")
            return None
        return load_words_file(self.vocabulary_filepath, self.loader.wc)

    def display(self):
        return display_results(self.model.documents_, self.model.partitions_, self.words, self.n_words)

    def summary(self):
        return cluster_summary(self.model.state_, self.model.documents_)

    def plot(self, filepath = None):
        axs = plot_clustering(self.model, title=f"Spherical k-means on {self.doc_filepath.name}, k={self.n_clusters}")
        if filepath is not None :
            axs[0].figure.savefig(filepath, bbox_inches='tight')
            plt.close(axs[0].figure)
        return axs


def parse_args(argv:list = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='spkmeans', description='Spherical k-means clustering of a document-term matrix.')
    parser.add_argument('fname', nargs='?', default=str(DOC_FILEPATH), help='document file (default: %(default)s)')
    parser.add_argument('k', nargs='?', type=int, default=DEFAULT_K, help='number of clusters (default: %(default)s)')
    parser.add_argument('threads', nargs='?', type=int, default=DEFAULT_N_THREADS, help='assignment threads (default: %(default)s)')
    parser.add_argument('--vocabulary', default=str(VOCABULARY_FILEPATH), help='vocabulary file (default: %(default)s)')
    parser.add_argument('--threshold', type=float, default=Q_THRESHOLD, help='convergence threshold (default: %(default)s)')
    parser.add_argument('--max-iter', type=int, default=None, help='maximum number of refinement iterations')
    parser.add_argument('--n-words', type=int, default=DEFAULT_N_WORDS, help='words shown per partition (default: %(default)s)')
    parser.add_argument('--plot', default=None, help='save the clustering plot to this file')
    parser.add_argument('--quiet', action='store_true', help='only print the partitions')
    return parser.parse_args(argv)


def main(argv:list = None) -> int:
    args = parse_args(argv)
    if not os.path.exists(args.fname):
        print(f"Error: file \"{args.fname}\" does not exist.")
        return 1

    try :
        n_threads = resolve_n_jobs(args.threads)
        print(f"Running SPK Means on \"{args.fname}\" with k={args.k} ({n_threads} threads).")
        pipeline = SPKMeansPipeline(doc_filepath=args.fname,
                                    vocabulary_filepath=args.vocabulary,
                                    n_clusters=args.k,
                                    n_jobs=n_threads,
                                    threshold=args.threshold,
                                    max_iter=args.max_iter,
                                    n_words=args.n_words,
                                    verbose=not args.quiet).run()
    except SPKMeansError as e :
        print(f"Error: {e}")
        return 2

    pipeline.display()
    if args.plot is not None :
        pipeline.plot(args.plot)
    return 0


if __name__ == '__main__' :
    sys.exit(main())
