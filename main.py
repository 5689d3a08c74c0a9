#!/usr/bin/env python3
"""
Entry point for the bird photo uploader.
"""

import sys

from loguru import logger

from albumsync.config import load_user_config
from albumsync.errors import AlbumSyncError, RemoteOperationError
from albumsync.log import init_logging
from albumsync.uploader import Uploader


def main() -> int:
    try:
        config = load_user_config()
    except AlbumSyncError as e:
        logger.error(str(e))
        return 1
    log = init_logging(config["log_dir"], debug=config["debug"])

    uploader = Uploader(config, log=log)
    try:
        # 1) Read the names workbook
        uploader.prepare_metadata()

        # 2) Check every photo against it; stop here if any is invalid
        uploader.check_photos()

        # 3) Log in to Flickr
        uploader.authenticate()

        # 4) Upload, file into albums, reorder touched albums
        uploader.upload_photos()
    except RemoteOperationError as e:
        log.opt(exception=e).error("Flickr error: {}", e)
        return 1
    except AlbumSyncError as e:
        log.error("{}", e)
        return 1

    log.info("All uploads complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
