__version__ = '1.0.0'

from . import models, exceptions, defaults

from .api import Service, Bucket
from .aio_api import AsyncService, AsyncBucket
from .auth import Auth, AnonymousAuth
from .builder import RequestBuilder
from .http import Session
from .aio_http import AsyncSession
from .resources import encode_resources, is_subresource

from .transfer import upload_file, determine_part_size

from .compat import to_bytes, to_string, urlparse, urlquote, urlunquote

from .headers import make_headers
from .utils import SizedFileAdapter
from .utils import content_type_by_name, is_valid_bucket_name
from .utils import http_date, http_to_unixtime

from .models import PartInfo
from .models import OBJECT_ACL_DEFAULT, OBJECT_ACL_PRIVATE, OBJECT_ACL_PUBLIC_READ, OBJECT_ACL_PUBLIC_READ_WRITE

from requests.structures import CaseInsensitiveDict

import logging

logger = logging.getLogger('osslite')


def set_file_logger(file_path, name="osslite", level=logging.INFO, format_string=None):
    global logger
    if not format_string:
        format_string = "%(asctime)s %(name)s [%(levelname)s] %(thread)d : %(message)s"
    logger = logging.getLogger(name)
    logger.setLevel(level)
    fh = logging.FileHandler(file_path)
    fh.setLevel(level)
    formatter = logging.Formatter(format_string)
    fh.setFormatter(formatter)
    logger.addHandler(fh)


def set_stream_logger(name='osslite', level=logging.DEBUG, format_string=None):
    global logger
    if not format_string:
        format_string = "%(asctime)s %(name)s [%(levelname)s] %(thread)d : %(message)s"
    logger = logging.getLogger(name)
    logger.setLevel(level)
    fh = logging.StreamHandler()
    fh.setLevel(level)
    formatter = logging.Formatter(format_string)
    fh.setFormatter(formatter)
    logger.addHandler(fh)
