from pathlib import Path

DOC_FILEPATH = Path('data')
VOCABULARY_FILEPATH = Path('../TestData/vocabulary')

# Clustering defaults
DEFAULT_K = 2
Q_THRESHOLD = 0.001
DEFAULT_MAX_ITER = None
EMPTY_CLUSTER_POLICIES = ('raise', 'carry')
DEFAULT_EMPTY_CLUSTER = 'raise'

# Parallel assignment: the estimator runs single threaded, the command line uses 2 threads
DEFAULT_N_JOBS = 1
DEFAULT_N_THREADS = 2

# Reporting
DEFAULT_N_WORDS = 10
