"""
Map exports.

Only GeoJSON today; every format is produced from the same `FeatureSource` list the
map session keeps, so the export order is the collection registration order.
"""
