# -*- coding: utf-8 -*-

"""
osslite.defaults
~~~~~~~~~~~~~~~~

Global Default variables.

"""


def get(value, default_value):
    if value is None:
        return default_value
    else:
        return value


#: connection timeout
connect_timeout = 60

#: The threshold of file size for using multipart upload in upload_file().
multipart_threshold = 10 * 1024 * 1024

#: Default part size.
part_size = 10 * 1024 * 1024

#: Upper bound of the number of parts in one multipart upload.
max_part_count = 10000

#: Lower bound of the size of every part but the last one.
min_part_size = 100 * 1024
