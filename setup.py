from setuptools import setup, find_packages

setup(
    name='oneshot-http',
    version='0.1.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    include_package_data=True,
    description='Minimal blocking HTTP client: one request in, one structured response out.',
    author='jmikedupont2',
    author_email='jmikedupont2@example.com',
    url='https://github.com/jmikedupont2/oneshot-http',
    install_requires=[
        'httpx>=0.24',
        'python-dotenv',
    ],
    extras_require={
        'test': ['pytest>=7'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.10',
    zip_safe=False,
)
