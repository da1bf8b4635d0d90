from setuptools import setup

setup(name='pyportrait',
      version='0.1.0',
      description='Render portraits as a hybrid of filled Voronoi cells and stippled points around movable hotspots.',
      url='https://github.com/benmaier/pyportrait',
      author='Benjamin F. Maier',
      author_email='benjaminfrankmaier@gmail.com',
      license='MIT',
      packages=['pyportrait'],
      include_package_data = True,
      install_requires=[
          'numpy',
          'scipy',
          'matplotlib',
          'shapely',
          'progressbar2',
          'Pillow',
      ],
      extras_require={
          'test': [
              'pytest',
          ],
      },
      dependency_links=[
          ],
      zip_safe=False)
