"""Report the health of a cluster operator through its ClusterOperator
status resource.
"""
