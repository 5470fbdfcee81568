from setuptools import setup

setup(
    name='ndview',
    version='0.0.1',
    description='Strided N-dimensional arrays with shared-storage views',
    author='ndview developers',
    license='MIT',
    packages=['ndview'],
    python_requires='>=3.10',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
