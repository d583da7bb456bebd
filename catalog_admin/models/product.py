from sqlalchemy import Column, String, Integer, Numeric, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from catalog_admin.models.store import Base, new_id


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    store_id = Column(String(36), ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True)
    # Attribute references; deleting a referenced attribute fails while products point at it
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    size_id = Column(String(36), ForeignKey("sizes.id"), nullable=True, index=True)
    color_id = Column(String(36), ForeignKey("colors.id"), nullable=True, index=True)
    gender_id = Column(String(36), ForeignKey("genders.id"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, default=False)
    is_archived = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    store = relationship("Store", back_populates="products")
    category = relationship("Category", back_populates="products")
    size = relationship("Size", back_populates="products")
    color = relationship("Color", back_populates="products")
    gender = relationship("Gender", back_populates="products")
    images = relationship(
        "Image",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Image.position",
    )


class Image(Base):
    __tablename__ = "images"

    id = Column(String(36), primary_key=True, default=new_id)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(1000), nullable=False)
    # Creation order within the product
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    product = relationship("Product", back_populates="images")
