from setuptools import setup, find_packages
from pathlib import Path

package_name = 'cluster-status-operator'
description = (
    'Reports the health of a cluster operator through its ClusterOperator '
    'status resource.'
)
author = 'Association of Universities for Research in Astronomy'
author_email = 'sqre-admin@lists.lsst.org'
license = 'MIT'
pypi_classifiers = [
    'Development Status :: 4 - Beta',
    'License :: OSI Approved :: MIT License',
    'Programming Language :: Python :: 3.10'
]
keywords = ['kubernetes', 'openshift', 'operator']
readme = Path(__file__).parent / 'README.rst'

# Core dependencies
install_requires = [
    'kopf>=1.35',
    'kubernetes>=28.1.0',
    'structlog>=23.1.0',
]

# Test dependencies
tests_require = [
    'pytest>=7.0',
    'pyyaml>=6.0',
]
tests_require += install_requires

# Optional dependencies (like for dev)
extras_require = {
    # For development environments
    'dev': tests_require,
    'test': tests_require,
}

setup(
    name=package_name,
    version='0.1.0',
    description=description,
    long_description=readme.read_text(),
    author=author,
    author_email=author_email,
    license=license,
    classifiers=pypi_classifiers,
    keywords=keywords,
    package_dir={'': 'src'},
    packages=find_packages('src'),
    python_requires='>=3.10',
    install_requires=install_requires,
    extras_require=extras_require,
    include_package_data=True
)
