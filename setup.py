from setuptools import setup

setup(
    name='dcdelaunay',
    version='0.1',
    packages=['dcdelaunay', 'dcdelaunay.grid', 'dcdelaunay.spatial'],
    install_requires=['numpy', 'matplotlib', 'shapely'],
    extras_require={'test': ['pytest', 'scipy']},
    python_requires='>=3.8',
    license='MIT',
    description='Divide and conquer Delaunay triangulation with constraint edges',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
