"""Code generators for the qproc and HyperCPU targets and their common base."""