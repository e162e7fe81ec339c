from setuptools import setup


setup(
    name='rpntui',
    version='0.1.0',
    description='Full-screen RPN calculator, extensible with Lua and Uiua',
    install_requires=[
        'regex',
        'prompt_toolkit',
        'lupa',
        'platformdirs',
    ],
    packages=['rpntui'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.8',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    entry_points={
        'console_scripts': [
            'rpntui = rpntui.cli:main',
        ],
    },
    license='ISC',
)
