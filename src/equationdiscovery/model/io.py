"""
Input/Output Manager (JSON / HDF5)
Handles saving and loading the EquationDatabase.

JSON is the format the documentation browser reads. The HDF5 archive keeps
the same record plus the version of this package that produced it.
"""
import json
import logging
import os
from importlib.metadata import version, PackageNotFoundError

import h5py
import numpy as np

from equationdiscovery.model.database import EquationDatabase

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("equationdiscovery")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

JSON_EXTENSIONS = (".json",)
HDF5_EXTENSIONS = (".h5", ".hdf5")

# HDF5 attributes are limited to 64KB
ATTRIBUTE_SIZE_LIMIT = 60000


class IOManager:

    @staticmethod
    def save_database(database: EquationDatabase, filepath: str) -> None:
        logger.info(f"Saving equation database ({len(database)} signatures) to: {filepath}")
        ext = os.path.splitext(filepath)[1].lower()
        if ext not in JSON_EXTENSIONS + HDF5_EXTENSIONS:
            raise ValueError(f"Unsupported database file extension '{ext}'.")

        parent = os.path.dirname(os.path.abspath(filepath))
        os.makedirs(parent, exist_ok=True)

        try:
            if ext in JSON_EXTENSIONS:
                with open(filepath, "w", encoding="utf-8") as f:
                    json.dump(database.to_dict(), f, indent=2)
            else:
                IOManager._save_hdf5(database, filepath)

            logger.info(f"Equation database saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save equation database: {e}")
            raise e

    @staticmethod
    def load_database(filepath: str) -> EquationDatabase:
        logger.info(f"Loading equation database from: {filepath}")
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Database file not found: {filepath}")

        ext = os.path.splitext(filepath)[1].lower()
        if ext in HDF5_EXTENSIONS:
            if not h5py.is_hdf5(filepath):
                msg = f"File '{filepath}' is not a valid HDF5 file."
                logger.error(msg)
                raise ValueError(msg)
        elif ext not in JSON_EXTENSIONS:
            raise ValueError(f"Unsupported database file extension '{ext}'.")

        try:
            if ext in JSON_EXTENSIONS:
                with open(filepath, "r", encoding="utf-8") as f:
                    database = EquationDatabase.from_dict(json.load(f))
            else:
                database = IOManager._load_hdf5(filepath)

            logger.info(f"Loaded {len(database)} signatures from: {filepath}")
            return database

        except Exception as e:
            logger.exception(f"Failed to load equation database: {e}")
            raise e

    # --- HDF5 HELPERS ---

    @staticmethod
    def _save_hdf5(database: EquationDatabase, filepath: str) -> None:
        with h5py.File(filepath, "w") as f:
            f.attrs["app_version"] = APP_VERSION
            f.attrs["version"] = database.version
            f.attrs["generated_at"] = database.generated_at
            f.attrs["source"] = database.source

            methods_json = json.dumps([m.to_dict() for m in database.methods])

            # Use dataset if data exceeds HDF5 attribute size limit
            if len(methods_json) > ATTRIBUTE_SIZE_LIMIT:
                logger.info(f"Method list is large ({len(methods_json)} bytes), using dataset")
                f.create_dataset("methods", data=np.void(methods_json.encode('utf-8')))
            else:
                f.attrs["methods_json"] = methods_json

    @staticmethod
    def _load_hdf5(filepath: str) -> EquationDatabase:
        with h5py.File(filepath, "r") as f:
            methods_json = None
            if "methods" in f:
                # Large data stored as dataset
                methods_json = bytes(f["methods"][()]).decode('utf-8')
            elif "methods_json" in f.attrs:
                methods_json = f.attrs["methods_json"]

            data = {
                "version": _as_str(f.attrs.get("version", "")),
                "generatedAt": _as_str(f.attrs.get("generated_at", "")),
                "source": _as_str(f.attrs.get("source", "")),
                "methods": json.loads(methods_json) if methods_json else [],
            }
            logger.debug(f"HDF5 database written by version {_as_str(f.attrs.get('app_version', 'unknown'))}")

        return EquationDatabase.from_dict(data)


def _as_str(value) -> str:
    # HDF5 may hand back bytes or numpy scalars instead of str
    if isinstance(value, bytes):
        return value.decode('utf-8')
    return str(value)
