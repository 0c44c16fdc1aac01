from user_clustering.runners.tuning import ParameterTuner, build_clusters

__all__ = ["ParameterTuner", "build_clusters"]
