# ABOUTME: sumgate - verify files against recorded checksums under a byte budget.
# ABOUTME: Package root; the public engine lives in sumgate.core.
