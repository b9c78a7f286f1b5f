"""
商品应用服务层的数据传输对象(DTOs)。
定义应用服务与外部通信使用的数据结构，金额以两位小数的字符串输出。
"""
from typing import Any, Dict, List, Optional

from products.domain import Category, Product


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value else None


class ProductDTO:
    """商品DTO"""

    def __init__(
        self,
        id: str,
        name: str,
        description: str,
        price: str,
        discount: float,
        image: str,
        rating: float,
        sales: int,
        specification: Dict[str, Any],
        status: str,
        stock: int,
        badge: str,
        category: Optional[str],
        category_name: Optional[str],
        date_added: Optional[str],
        updated_at: Optional[str]
    ):
        self.id = id
        self.name = name
        self.description = description
        self.price = price
        self.discount = discount
        self.image = image
        self.rating = rating
        self.sales = sales
        self.specification = specification
        self.status = status
        self.stock = stock
        self.badge = badge
        self.category = category
        self.category_name = category_name
        self.date_added = date_added
        self.updated_at = updated_at

    @classmethod
    def from_entity(cls, product: Product) -> 'ProductDTO':
        """
        从商品实体创建DTO。

        Args:
            product: 商品实体

        Returns:
            商品DTO
        """
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=str(product.price.quantize().amount),
            discount=float(product.discount),
            image=product.image,
            rating=float(product.rating),
            sales=product.sales,
            specification=product.specification,
            status=product.status,
            stock=product.stock,
            badge=product.badge,
            category=product.category_slug,
            category_name=product.category_name,
            date_added=_isoformat(product.date_added),
            updated_at=_isoformat(product.updated_at),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProductDTO':
        """从缓存中的字典恢复DTO"""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """商品详情"""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'price': self.price,
            'discount': self.discount,
            'image': self.image,
            'rating': self.rating,
            'sales': self.sales,
            'specification': self.specification,
            'status': self.status,
            'stock': self.stock,
            'badge': self.badge,
            'category': self.category,
            'category_name': self.category_name,
            'date_added': self.date_added,
            'updated_at': self.updated_at,
        }

    def to_list_item(self) -> Dict[str, Any]:
        """搜索和后台列表中的商品"""
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'category': self.category,
            'stock': self.stock,
            'image': self.image,
            'status': self.status,
            'description': self.description,
            'discount': self.discount,
            'rating': self.rating,
        }

    def to_category_item(self) -> Dict[str, Any]:
        """分类页中的商品"""
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'image': self.image,
            'stock': self.stock,
            'discount': self.discount,
            'rating': self.rating,
        }


class ProductListDTO:
    """商品分页列表DTO"""

    def __init__(self, items: List[ProductDTO], total: int, page: int, page_size: int):
        self.items = items
        self.total = total
        self.page = page
        self.page_size = page_size


class CategoryDTO:
    """分类DTO"""

    def __init__(
        self,
        id: str,
        name: str,
        slug: str,
        description: str = "",
        image: str = "",
        icon: str = "",
        product_count: int = 0
    ):
        self.id = id
        self.name = name
        self.slug = slug
        self.description = description
        self.image = image
        self.icon = icon
        self.product_count = product_count

    @classmethod
    def from_entity(cls, category: Category) -> 'CategoryDTO':
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug,
            description=category.description,
            image=category.image,
            icon=category.icon,
            product_count=category.product_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'image': self.image,
            'icon': self.icon,
            'product_count': self.product_count,
        }

    def to_option(self) -> Dict[str, Any]:
        """后台商品表单中的分类选项"""
        return {'id': self.id, 'name': self.name, 'slug': self.slug}


class CategoryDetailDTO:
    """分类及其商品DTO"""

    def __init__(self, category: CategoryDTO, products: List[ProductDTO]):
        self.category = category
        self.products = products

    def to_dict(self) -> Dict[str, Any]:
        data = self.category.to_dict()
        data.pop('product_count')
        data['products'] = [product.to_category_item() for product in self.products]
        return data
