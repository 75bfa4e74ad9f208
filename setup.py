from setuptools import setup


setup(
    name='xsolve',
    version='0.1.0',
    description='Expression evaluator, root finder and integrator',
    install_requires=[
        'regex',
        'prompt_toolkit',
        'numpy',
    ],
    author='Alex Pilon',
    author_email='alp@alexpilon.ca',
    packages=['xsolve'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.7',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'bandit',
            'mypy',
            'safety',
        ],
    },
    entry_points={
        'console_scripts': [
            'xsolve = xsolve.cli:main',
        ],
    },
    license='ISC',
)
